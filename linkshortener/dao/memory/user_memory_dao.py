import uuid

from beartype import beartype

from linkshortener.models import UserModel
from linkshortener.dao.base import UserBaseDAO
from linkshortener.dao.memory.mixins import MemoryStoreMixin
from linkshortener.dao.memory.helpers import synchronized
from linkshortener.dao.exceptions import UserDoesNotExistError


class UserMemoryDAO(MemoryStoreMixin, UserBaseDAO):
    @synchronized
    @beartype
    def create(self, name: str, **kwargs) -> UserModel:
        user = UserModel(user_id=str(uuid.uuid4()), name=name)
        self.entries[user.user_id] = user
        return user

    @synchronized
    @beartype
    def get(self, user_id: str, **kwargs) -> UserModel:
        user = self.entries.get(user_id)
        if user is None:
            raise UserDoesNotExistError(f"User with ID '{user_id}' does not exist.")
        return user

    @synchronized
    @beartype
    def exists(self, user_id: str, **kwargs) -> bool:
        return user_id in self.entries

    @synchronized
    def count(self, **kwargs) -> int:
        return len(self.entries)
