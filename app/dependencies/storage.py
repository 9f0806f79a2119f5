from fastapi import Request

from app.services.storage import Storage


# === Storage Dependency
def get_storage(request: Request) -> Storage:
    """The single store instance created with the app (see app.main.create_app)."""
    return request.app.state.storage
