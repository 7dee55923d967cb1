# Force SQLModel table registration at test discovery time
# This ensures all models are registered before any test database creation
from openplay.models.session_record import SessionRecord  # noqa: F401
