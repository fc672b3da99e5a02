from bloxtrade.users.service import IdentityResolver

__all__ = ["IdentityResolver"]
