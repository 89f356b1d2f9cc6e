"""FastAPI dependencies for storage injection."""

from fastapi import Request, HTTPException

from kitchenpos.storage import Storage


def get_storage(request: Request) -> Storage:
    """
    Return the storage built at startup and kept on app.state.

    Route handlers open their own unit of work on it, so each request is
    one transaction.
    """
    storage = getattr(request.app.state, "storage", None)
    if storage is None:
        raise HTTPException(status_code=503, detail="Storage is not initialized")
    return storage
