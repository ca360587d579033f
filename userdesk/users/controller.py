from typing import Any

from userdesk.users.dto import parse_create, parse_update
from userdesk.users.service import UserService
from userdesk.web import (
    DeleteMapping,
    GetMapping,
    PatchMapping,
    PathVariable,
    PostMapping,
    RequestBody,
    ResponseEntity,
    RestController,
)

SENSITIVE_FIELDS = ("password",)


@RestController("/user")
class UserController:
    """REST API for user accounts. No authentication is enforced."""

    def __init__(self, user_service: UserService):
        self.user_service = user_service

    @PostMapping("")
    async def create(self, body: Any = RequestBody()) -> ResponseEntity:
        data = parse_create(body)
        user = await self.user_service.create(data)
        return ResponseEntity.created(user.to_dict(exclude=SENSITIVE_FIELDS))

    @GetMapping("")
    async def find_all(self) -> ResponseEntity:
        users = await self.user_service.find_all()
        return ResponseEntity.ok([user.to_dict() for user in users])

    @GetMapping("/{id}")
    async def find_one(self, id: str = PathVariable()) -> ResponseEntity:
        user = await self.user_service.find_one(id)
        return ResponseEntity.ok(user.to_dict())

    @PatchMapping("/{id}")
    async def update(
        self, id: str = PathVariable(), body: Any = RequestBody()
    ) -> ResponseEntity:
        data = parse_update(body)
        user = await self.user_service.update(id, data)
        return ResponseEntity.ok(user.to_dict())

    @DeleteMapping("/{id}")
    async def remove(self, id: str = PathVariable()) -> ResponseEntity:
        await self.user_service.remove(id)
        return ResponseEntity.no_content()
