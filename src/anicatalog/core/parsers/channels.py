"""
Parsers de titres par chaîne (Ani-One, Ani-Mi, Takarir/Muse, Tropics, It's Anime, doublages ID).
Chaque parser est pur : (title, url, body) -> list[EpisodeRecord] | None.
"""

from __future__ import annotations

import re

from anicatalog.core.models import EpisodeRecord
from anicatalog.core.parsers.base import ParserRegistry
from anicatalog.core.utils.text import clean_series_name, extract_video_id

# Numéro d'épisode : entier ou une décimale (spéciaux .5)
EPISODE_TAG = re.compile(r"#(\d+(?:\.\d+)?)")
BRACKETED_NAME = re.compile(r"《(.+?)》")
SEASON_PHRASE = re.compile(r"Season\s+(\d+)", re.IGNORECASE)

DUB_SUFFIX = " (Dub Indo)"
# Au-delà de cet écart, une plage "Episode 1-12" est une compilation (ignorée)
MAX_RANGE_SPAN = 3


def parse_episode_number(raw: str) -> float:
    """Convertit "3" en 3 et "12.5" en 12.5."""
    raw = raw.strip()
    return float(raw) if "." in raw else int(raw)


def is_large_range(start: int, end: int) -> bool:
    return (end - start) > MAX_RANGE_SPAN


def _strip_name_brackets(name: str) -> str:
    return clean_series_name(name).replace("《", "").replace("》", "").strip()


class IndonesianDubParser:
    """Doublages indonésiens : suffixe (Dub Indo) pour ne jamais fusionner avec la VO."""

    id = "id_dub"

    _labeled = re.compile(
        r"^(.+?)\s+-\s+Episode\s*(\d+)\s*\[Takarir Indonesia\]", re.IGNORECASE
    )
    _generic = re.compile(r"^(.+?)\s+#(\d+(?:\.\d+)?)")
    _loose = re.compile(r"^(.+?)\s*\((?:ID|ID\s*Dub|ID\s*Sub|dub)\)", re.IGNORECASE)

    def parse(self, title: str, url: str, body: str) -> list[EpisodeRecord] | None:
        video_id = extract_video_id(url)

        m = self._labeled.match(title)
        if m:
            name = _strip_name_brackets(m.group(1))
            episode = int(m.group(2))
            return [
                EpisodeRecord(
                    series_name=name + DUB_SUFFIX,
                    episode=episode,
                    display_title=f"{name} - Episode {episode}",
                    url=url,
                    video_id=video_id,
                )
            ]

        m = self._generic.match(title)
        if m:
            name = _strip_name_brackets(m.group(1))
            return [
                EpisodeRecord(
                    series_name=name + DUB_SUFFIX,
                    episode=parse_episode_number(m.group(2)),
                    display_title=title,
                    url=url,
                    video_id=video_id,
                )
            ]

        m = self._loose.match(title)
        if m:
            ep_m = EPISODE_TAG.search(title)
            if not ep_m:
                return None
            name = _strip_name_brackets(m.group(1))
            return [
                EpisodeRecord(
                    series_name=name + DUB_SUFFIX,
                    episode=parse_episode_number(ep_m.group(1)),
                    display_title=title,
                    url=url,
                    video_id=video_id,
                )
            ]
        return None


class AniOneParser:
    """【Ani-One Indonesia】 : 《Nom》 [Season N] #N, variantes Special / Encore."""

    id = "ani_one"

    _full_episode = re.compile(r"^FULL EPISODE", re.IGNORECASE)
    _special = re.compile(r"^SPECIAL EPISODE", re.IGNORECASE)
    _encore = re.compile(r"\(ENCORE\)", re.IGNORECASE)

    marathon = False
    with_variants = True

    def _series_name(self, title: str) -> tuple[str, float] | None:
        name_m = BRACKETED_NAME.search(title)
        if not name_m:
            return None
        ep_m = EPISODE_TAG.search(title)
        if not ep_m:
            return None
        name = clean_series_name(name_m.group(1))
        # Une saison mentionnée entre 》 et # est une série distincte
        between = title[title.index("》") + 1 : ep_m.start()]
        season_m = SEASON_PHRASE.search(between)
        if season_m:
            name += f" Season {season_m.group(1)}"
        return name, parse_episode_number(ep_m.group(1))

    def parse(self, title: str, url: str, body: str) -> list[EpisodeRecord] | None:
        if self._full_episode.match(title):
            return None
        parsed = self._series_name(title)
        if parsed is None:
            return None
        name, episode = parsed
        if self.with_variants:
            if self._special.match(title):
                name += " (Special)"
            if self._encore.search(title):
                name += " (Encore)"
        return [
            EpisodeRecord(
                series_name=name,
                episode=episode,
                display_title=title,
                url=url,
                video_id=extract_video_id(url),
                is_marathon=self.marathon,
            )
        ]


class AniOneAsiaParser(AniOneParser):
    """【Ani-One Asia】 : même forme, toujours publié en session marathon."""

    id = "ani_one_asia"

    marathon = True
    with_variants = False


class AniMiAsiaParser:
    """【Ani-Mi Asia】 : donghua, "Nom [S3] #N (ENG sub)"."""

    id = "ani_mi_asia"

    _dropped = re.compile(r"(PV|Highlight|Special Screening|FULL EPISODE)", re.IGNORECASE)
    _pattern = re.compile(r"^(.+?)\s+#(\d+(?:\.\d+)?)(?:\s*\((.+?)\))?", re.IGNORECASE)
    _season_suffix = re.compile(r"\bS(\d+)$", re.IGNORECASE)

    def parse(self, title: str, url: str, body: str) -> list[EpisodeRecord] | None:
        if self._dropped.search(title):
            return None
        m = self._pattern.match(title)
        if not m:
            return None
        name = clean_series_name(m.group(1))
        season_m = self._season_suffix.search(name)
        if season_m:
            name = self._season_suffix.sub("", name).strip() + f" Season {season_m.group(1)}"
        return [
            EpisodeRecord(
                series_name=name,
                episode=parse_episode_number(m.group(2)),
                display_title=title,
                url=url,
                video_id=extract_video_id(url),
                is_marathon=True,
                is_donghua=True,
            )
        ]


class TakarirParser:
    """[Takarir Indonesia] / [Muse Indonesia] : "Nom - Episode N[-M] [tag]"."""

    id = "takarir"

    _playlist = re.compile(r"Semua Episode", re.IGNORECASE)
    _live_action = re.compile(r"\(Live-Action\)", re.IGNORECASE)
    # Titre exclu explicitement (court-métrage hors catalogue)
    _excluded = re.compile(r"PUI PUI MOLCAR", re.IGNORECASE)
    _pattern = re.compile(
        r"^(.+?)\s+-\s+Episode\s*(\d+(?:\s*[-–]\s*\d+)?)\s*\[(?:Takarir Indonesia|Muse Indonesia)\]",
        re.IGNORECASE,
    )
    _range = re.compile(r"(\d+)\s*[-–]\s*(\d+)")

    def parse(self, title: str, url: str, body: str) -> list[EpisodeRecord] | None:
        if self._playlist.search(title) or self._live_action.search(title) or self._excluded.search(title):
            return None
        m = self._pattern.match(title)
        if not m:
            return None
        name = clean_series_name(m.group(1))
        ep_part = m.group(2).strip()
        video_id = extract_video_id(url)

        range_m = self._range.search(ep_part)
        if range_m:
            start, end = int(range_m.group(1)), int(range_m.group(2))
            if is_large_range(start, end):
                return None
            return [
                EpisodeRecord(
                    series_name=name,
                    episode=start,
                    end_episode=end,
                    display_title=f"{name} - Episode {start}-{end}",
                    url=url,
                    video_id=video_id,
                )
            ]
        episode = int(ep_part)
        return [
            EpisodeRecord(
                series_name=name,
                episode=episode,
                display_title=f"{name} - Episode {episode}",
                url=url,
                video_id=video_id,
            )
        ]


class TropicsParser:
    """TROPICS ENTERTAINMENT / 【Subtitle Indonesia】 : 《Nom》 ... Episode N."""

    id = "tropics"

    _members_only = re.compile(r"Members Only", re.IGNORECASE)
    _episode = re.compile(r"Episode\s+(\d+)", re.IGNORECASE)

    def parse(self, title: str, url: str, body: str) -> list[EpisodeRecord] | None:
        if self._members_only.search(title):
            return None
        name_m = BRACKETED_NAME.search(title)
        if not name_m:
            return None
        ep_m = self._episode.search(title)
        if not ep_m:
            return None
        name = clean_series_name(name_m.group(1))
        episode = int(ep_m.group(1))
        return [
            EpisodeRecord(
                series_name=name,
                episode=episode,
                display_title=f"{name} - Episode {episode}",
                url=url,
                video_id=extract_video_id(url),
            )
        ]


class ItsAnimeParser:
    """
    It's Anime : vidéo marathon "Nom - Episode A-B [It's Anime]" + section Chapters:.
    Une ligne "H:MM:SS Episode N: titre" par épisode -> un EpisodeRecord horodaté.
    """

    id = "its_anime"

    _header = re.compile(r"^(.+)\s+-\s+Episode\s+(\d+)[-~]+(\d+)\s*\[It's Anime\]", re.IGNORECASE)
    _chapters_start = re.compile(r"^Chapters:", re.IGNORECASE)
    _chapter_line = re.compile(
        r"^[-*]?\s*(\d{1,2}):(\d{2}):(\d{2})\s+Episode\s+(\d+)\s*[：:]?\s*(.*)$", re.IGNORECASE
    )

    def parse(self, title: str, url: str, body: str) -> list[EpisodeRecord] | None:
        video_id = extract_video_id(url)
        if not video_id:
            return None
        m = self._header.match(title)
        if not m:
            return None
        name = clean_series_name(m.group(1))
        records: list[EpisodeRecord] = []
        in_chapters = False
        for line in body.split("\n"):
            line = line.strip()
            if self._chapters_start.match(line):
                in_chapters = True
                continue
            if not in_chapters:
                continue
            ch = self._chapter_line.match(line)
            if not ch:
                continue
            h, mi, s = int(ch.group(1)), int(ch.group(2)), int(ch.group(3))
            episode = int(ch.group(4))
            records.append(
                EpisodeRecord(
                    series_name=name,
                    episode=episode,
                    display_title=f"{name} - Episode {episode}",
                    url=url,
                    video_id=video_id,
                    start_seconds=h * 3600 + mi * 60 + s,
                    chapter_title=ch.group(5).strip(),
                    is_marathon=True,
                )
            )
        return records or None


# Enregistrement au chargement du module
for _parser in (
    IndonesianDubParser(),
    AniOneParser(),
    AniOneAsiaParser(),
    AniMiAsiaParser(),
    TakarirParser(),
    TropicsParser(),
    ItsAnimeParser(),
):
    ParserRegistry.register(_parser)
