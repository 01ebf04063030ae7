"""Abstract base class for user data access objects (DAOs).

This interface defines the contract for creating and looking up users
identified by an opaque identifier.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from linkshortener.dao.memory import UserMemoryDAO
        >>> dao = UserMemoryDAO()

        >>> user = dao.create("alice")
        >>> dao.get(user.user_id).name
        'alice'
"""

from abc import ABC, abstractmethod

from linkshortener.models import UserModel


class UserBaseDAO(ABC):
    """Interface for user data access objects (DAOs)

    Methods:
        create(name: str, **kwargs) -> UserModel:
            Allocate a fresh identifier and store a new user.

        get(user_id: str, **kwargs) -> UserModel:
            Retrieve a user by identifier.
            Raises UserDoesNotExistError if the user does not exist.

        exists(user_id: str, **kwargs) -> bool:
            Check whether a user is registered.

        count(**kwargs) -> int:
            Number of registered users.
    """

    @abstractmethod
    def create(self, name: str, **kwargs) -> UserModel:
        """Create and store a new user.

        Args:
            name (str):
                Display name of the user.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            UserModel:
                The newly created user.
        """
        pass

    @abstractmethod
    def get(self, user_id: str, **kwargs) -> UserModel:
        """Retrieve a user by identifier.

        Raises:
            UserDoesNotExistError:
                If the user does not exist.
        """
        pass

    @abstractmethod
    def exists(self, user_id: str, **kwargs) -> bool:
        pass

    @abstractmethod
    def count(self, **kwargs) -> int:
        pass
