"""Fixtures pytest communes."""
import pytest
from pathlib import Path

from anicatalog.core.models import EpisodeRecord

# Répertoire des fixtures
FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"


@pytest.fixture
def fixtures_dir():
    return FIXTURES_DIR


@pytest.fixture
def make_record():
    """Fabrique d'EpisodeRecord : make_record("Foo", 1, video_id="A")."""

    def _make(series_name: str, episode: float, *, video_id: str | None = None, **kwargs) -> EpisodeRecord:
        vid = video_id if video_id is not None else "".join(series_name.split()) + f"_{episode}"
        return EpisodeRecord(
            series_name=series_name,
            episode=episode,
            display_title=kwargs.pop("display_title", f"{series_name} #{episode}"),
            url=kwargs.pop("url", f"https://www.youtube.com/watch?v={vid}"),
            video_id=vid,
            **kwargs,
        )

    return _make
