"""Static assets packaged with the service."""

from functools import lru_cache
from importlib.resources import files


@lru_cache
def home_html() -> str:
    """The dashboard page served at '/'. Read once per process."""
    return files(__name__).joinpath("home.html").read_text(encoding="utf-8")
