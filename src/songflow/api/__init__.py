"""HTTP host exports."""

from songflow.api.server import create_app
from songflow.api.store import SongStore

__all__ = ["SongStore", "create_app"]
