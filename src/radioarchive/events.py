"""Scheduling backend integration for event metadata lookup."""

from __future__ import annotations

from dataclasses import dataclass

import requests

from . import __version__
from .errors import MetadataError

USER_AGENT = f"radioarchive/{__version__}"


@dataclass(frozen=True)
class Event:
    event_id: int
    start_datetime: str
    end_datetime: str
    full_title: str = ""
    series_name: str = ""
    title: str = ""
    episode: str = ""
    location_mapped: str = ""
    excerpt: str = ""
    image: str = ""

    @property
    def start_date(self) -> str:
        return self.start_datetime.strip()[:10]

    @property
    def summary(self) -> str:
        return f"#{self.event_id} {self.start_datetime} {self.full_title}"

    @classmethod
    def from_dict(cls, d: dict) -> Event:
        try:
            event_id = int(d["event_id"])
            start = str(d["start_datetime"])
            end = str(d["end_datetime"])
        except (KeyError, TypeError, ValueError) as e:
            raise MetadataError(f"Malformed event record: {d!r}") from e

        def text(key: str) -> str:
            value = d.get(key)
            return "" if value is None else str(value)

        return cls(
            event_id=event_id,
            start_datetime=start,
            end_datetime=end,
            full_title=text("full_title"),
            series_name=text("series_name"),
            title=text("title"),
            episode=text("episode"),
            location_mapped=text("location_mapped"),
            excerpt=text("excerpt"),
            image=text("image"),
        )


class EventClient:
    """Fetch events by date or by id from the scheduling backend."""

    def __init__(
        self,
        base_url: str,
        session: requests.Session | None = None,
        timeout: float = 30.0,
        phase: str = "all",
    ):
        self.base_url = base_url
        self.session = session or requests.Session()
        self.timeout = timeout
        self.phase = phase

    def events_for_date(self, date: str) -> list[Event]:
        return self._fetch({
            "from_date": date,
            "from_time": "00:00",
            "till_date": date,
            "till_time": "23:59",
            "phase": self.phase,
            "json": 1,
        })

    def event_by_id(self, event_id: int) -> list[Event]:
        return self._fetch({"event_id": event_id, "json": 1})

    def _fetch(self, params: dict) -> list[Event]:
        try:
            response = self.session.get(
                self.base_url,
                params=params,
                timeout=self.timeout,
                headers={"User-Agent": USER_AGENT},
            )
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            raise MetadataError(f"Event lookup failed: {e}") from e
        except ValueError as e:
            raise MetadataError(f"Event lookup returned invalid JSON: {e}") from e

        if not isinstance(data, dict) or "events" not in data:
            raise MetadataError("Event lookup response has no 'events' field")
        return _parse_event_list(data["events"] or [])


def _parse_event_list(event_list: list[dict]) -> list[Event]:
    return [Event.from_dict(rec) for rec in event_list]
