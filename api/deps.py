"""FastAPI dependencies."""

from fastapi import Request

from repos.storage import Storage


def get_storage(request: Request) -> Storage:
    """
    Dependency to get the storage selected at startup.

    The storage is created in the application lifespan and kept on app.state;
    tests override this dependency with their own storage.
    """
    return request.app.state.storage
