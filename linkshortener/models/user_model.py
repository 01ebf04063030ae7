from dataclasses import dataclass, field


@dataclass(frozen=True)
class UserModel:
    # fmt: off
    user_id: str                        # Opaque unique identifier (uuid4)
    name: str = field(compare=False)    # Display name, not part of identity
    # fmt: on

    def __str__(self) -> str:
        return f'{self.name} ({self.user_id})'
