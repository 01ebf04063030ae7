from linkshortener.models.short_link_model import ShortLinkModel
from linkshortener.models.user_model import UserModel


__all__ = [
    'ShortLinkModel',
    'UserModel',
]
