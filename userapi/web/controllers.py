import logging

from userapi.data.entity import User
from userapi.data.repository import UserRepository
from userapi.web.mappings import (
    DeleteMapping,
    GetMapping,
    PostMapping,
    PutMapping,
    RestController,
)
from userapi.web.response import ResponseEntity

logger = logging.getLogger(__name__)


@RestController()
class UserController:
    """CRUD endpoints for users, each a direct call into the repository."""

    def __init__(self, user_repository: UserRepository):
        self.user_repository = user_repository

    @PostMapping("", operation_id="createUser")
    async def create_user(self, user: User) -> ResponseEntity:
        logger.info("* createUser")
        logger.debug(user)
        # Storage assigns the id
        user.id = None
        saved_user = await self.user_repository.save(user)
        logger.debug(saved_user)
        return ResponseEntity.created(saved_user)

    @GetMapping("", operation_id="getAllUsers")
    async def get_all_users(self) -> ResponseEntity:
        logger.info("* getAllUsers")
        users = await self.user_repository.find_all()
        logger.debug(users)
        return ResponseEntity.ok(users)

    @GetMapping("/{id:int}", operation_id="getUserById")
    async def get_user_by_id(self, id: int) -> ResponseEntity:
        logger.info(f"* getUserById {id}")
        user = await self.user_repository.find_by_id(id)
        if user is None:
            return ResponseEntity.not_found()
        return ResponseEntity.ok(user)

    @PutMapping("/{id:int}", operation_id="updateUser")
    async def update_user(self, id: int, user: User) -> ResponseEntity:
        logger.info(f"* updateUser {id}")
        if await self.user_repository.find_by_id(id) is None:
            return ResponseEntity.not_found()
        user.id = id
        updated_user = await self.user_repository.save(user)
        logger.debug(updated_user)
        return ResponseEntity.ok(updated_user)

    @DeleteMapping("/{id:int}", operation_id="deleteUserById")
    async def delete_user_by_id(self, id: int) -> ResponseEntity:
        logger.info(f"* deleteUserById {id}")
        if await self.user_repository.find_by_id(id) is None:
            return ResponseEntity.not_found()
        await self.user_repository.delete_by_id(id)
        return ResponseEntity.no_content()
