from __future__ import annotations


class SauceCatalogError(Exception):
    pass


class ReactionError(SauceCatalogError):
    """A reaction request that cannot be applied. Never retryable."""


class InvalidReactionValue(ReactionError):
    def __init__(self, value: object):
        super().__init__(f"Unknown reaction type: {value!r}")
        self.value = value


class NothingToRemove(ReactionError):
    def __init__(self, user_id: str):
        super().__init__("Nothing to suppress")
        self.user_id = user_id


class AlreadyReacted(ReactionError):
    def __init__(self, user_id: str, liked: bool):
        super().__init__("User already liked" if liked else "User already disliked")
        self.user_id = user_id
        self.liked = liked


class ConflictingReaction(ReactionError):
    def __init__(self, user_id: str, liked: bool):
        if liked:
            message = "User must remove like before disliking"
        else:
            message = "User must remove dislike before liking"
        super().__init__(message)
        self.user_id = user_id
        self.liked = liked


class SauceNotFoundError(SauceCatalogError):
    def __init__(self, sauce_id: str):
        super().__init__(f"Sauce not found: {sauce_id}")
        self.sauce_id = sauce_id


class SaucePermissionError(SauceCatalogError):
    def __init__(self, sauce_id: str, user_id: str):
        super().__init__("Forbidden")
        self.sauce_id = sauce_id
        self.user_id = user_id


class RepositoryError(SauceCatalogError):
    def __init__(self, operation: str, reason: str):
        super().__init__(f"Repository error during {operation}: {reason}")
        self.operation = operation
        self.reason = reason


class StorageError(SauceCatalogError):
    pass


class InvalidObjectKeyError(StorageError):
    def __init__(self, object_key: str, reason: str = "Invalid object key"):
        super().__init__(f"{reason}: {object_key}")
        self.object_key = object_key
        self.reason = reason


class UnsupportedImageError(StorageError):
    def __init__(self, content_type: str | None):
        super().__init__(f"Unsupported image type: {content_type}")
        self.content_type = content_type


class ImageDeleteError(StorageError):
    def __init__(self, object_key: str, reason: str):
        super().__init__(f"Failed to delete image {object_key}: {reason}")
        self.object_key = object_key
        self.reason = reason


class AuthError(SauceCatalogError):
    pass


class EmailAlreadyRegisteredError(AuthError):
    def __init__(self, email: str):
        super().__init__(f"Email already registered: {email}")
        self.email = email


class InvalidCredentialsError(AuthError):
    def __init__(self, message: str = "Invalid login or password"):
        super().__init__(message)


class InvalidTokenError(AuthError):
    def __init__(self, message: str = "Invalid/expired token"):
        super().__init__(message)
