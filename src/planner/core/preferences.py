"""User preferences model - no I/O dependencies."""

from dataclasses import dataclass, field
from zoneinfo import ZoneInfo


@dataclass
class TimeRange:
    """A time-of-day range in 24h "HH:MM" local time."""

    start: str
    end: str

    @classmethod
    def from_dict(cls, data: dict) -> "TimeRange":
        return cls(start=data["start"], end=data["end"])

    def to_dict(self) -> dict:
        return {"start": self.start, "end": self.end}


@dataclass
class TimeBlock:
    """A recurring weekly window reserved regardless of calendar events."""

    day: str
    start: str
    end: str
    label: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "TimeBlock":
        return cls(
            day=data["day"].lower(),
            start=data["start"],
            end=data["end"],
            label=data.get("label", ""),
        )

    def to_dict(self) -> dict:
        return {"day": self.day, "start": self.start, "end": self.end, "label": self.label}


@dataclass
class LifeArea:
    """A user-defined life area with a weekly hours budget. Priority 1 = highest."""

    name: str
    weekly_target_hours: float
    priority: int

    @classmethod
    def from_dict(cls, data: dict) -> "LifeArea":
        return cls(
            name=data["name"],
            weekly_target_hours=data.get("weeklyTargetHours", 0),
            priority=data.get("priority", 999),
        )

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "weeklyTargetHours": self.weekly_target_hours,
            "priority": self.priority,
        }


@dataclass
class EnergyPatterns:
    """Declared energy rhythm, evaluated high -> medium -> low."""

    high_energy: list[TimeRange] = field(default_factory=list)
    medium_energy: list[TimeRange] = field(default_factory=list)
    low_energy: list[TimeRange] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "EnergyPatterns":
        return cls(
            high_energy=[TimeRange.from_dict(r) for r in data.get("highEnergy", [])],
            medium_energy=[TimeRange.from_dict(r) for r in data.get("mediumEnergy", [])],
            low_energy=[TimeRange.from_dict(r) for r in data.get("lowEnergy", [])],
        )

    def to_dict(self) -> dict:
        return {
            "highEnergy": [r.to_dict() for r in self.high_energy],
            "mediumEnergy": [r.to_dict() for r in self.medium_energy],
            "lowEnergy": [r.to_dict() for r in self.low_energy],
        }


@dataclass
class SchedulingRules:
    """Scheduling limits and protected time."""

    min_break_between_events: int = 15
    max_meetings_per_day: int = 6
    protected_blocks: list[TimeBlock] = field(default_factory=list)
    preferred_planning_day: str = "sunday"
    planner_calendar_id: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "SchedulingRules":
        return cls(
            min_break_between_events=data.get("minBreakBetweenEvents", 15),
            max_meetings_per_day=data.get("maxMeetingsPerDay", 6),
            protected_blocks=[TimeBlock.from_dict(b) for b in data.get("protectedBlocks", [])],
            preferred_planning_day=data.get("preferredPlanningDay", "sunday"),
            planner_calendar_id=data.get("plannerCalendarId"),
        )

    def to_dict(self) -> dict:
        data = {
            "minBreakBetweenEvents": self.min_break_between_events,
            "maxMeetingsPerDay": self.max_meetings_per_day,
            "protectedBlocks": [b.to_dict() for b in self.protected_blocks],
            "preferredPlanningDay": self.preferred_planning_day,
        }
        if self.planner_calendar_id:
            data["plannerCalendarId"] = self.planner_calendar_id
        return data


@dataclass
class UserPreferences:
    """
    Everything the analysis engine may be tuned by.

    category_keywords, when set, replaces the built-in keyword table. It is
    kept as an ordered list of (area, keywords) pairs because categorization
    is first-match-wins in declaration order.

    timezone is the IANA zone analysis happens in. None means the process
    local zone.
    """

    energy_patterns: EnergyPatterns = field(default_factory=EnergyPatterns)
    life_areas: list[LifeArea] = field(default_factory=list)
    scheduling_rules: SchedulingRules = field(default_factory=SchedulingRules)
    category_keywords: list[tuple[str, list[str]]] | None = None
    timezone: str | None = None

    def zone(self) -> ZoneInfo | None:
        """The analysis zone, or None for the process local zone."""
        return ZoneInfo(self.timezone) if self.timezone else None

    def area_priority(self) -> dict[str, int]:
        """Map of life area name to priority rank."""
        return {area.name: area.priority for area in self.life_areas}

    @classmethod
    def from_dict(cls, data: dict) -> "UserPreferences":
        """Create preferences from their stored JSON shape."""
        keywords = data.get("categoryKeywords")
        return cls(
            energy_patterns=EnergyPatterns.from_dict(data.get("energyPatterns", {})),
            life_areas=[LifeArea.from_dict(a) for a in data.get("lifeAreas", [])],
            scheduling_rules=SchedulingRules.from_dict(data.get("schedulingRules", {})),
            # JSON objects keep their key order when decoded
            category_keywords=(
                [(area, list(words)) for area, words in keywords.items()]
                if keywords is not None
                else None
            ),
            timezone=data.get("timezone"),
        )

    def to_dict(self) -> dict:
        data = {
            "energyPatterns": self.energy_patterns.to_dict(),
            "lifeAreas": [a.to_dict() for a in self.life_areas],
            "schedulingRules": self.scheduling_rules.to_dict(),
        }
        if self.category_keywords is not None:
            data["categoryKeywords"] = {area: list(words) for area, words in self.category_keywords}
        if self.timezone:
            data["timezone"] = self.timezone
        return data
