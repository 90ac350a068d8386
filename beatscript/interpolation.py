"""Fills lead placeholders such as {{first_name}} into script text."""

from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Tuple

from .models import ParsedScript, ScriptBranch

# (placeholder, lead field, fallback shown when the field is empty, description)
PLACEHOLDERS: List[Tuple[str, str, str, str]] = [
    ("{{first_name}}", "first_name", "[First Name]", "Prospect's first name"),
    ("{{last_name}}", "last_name", "[Last Name]", "Prospect's last name"),
    ("{{company}}", "company", "[Company]", "Company name"),
    ("{{title}}", "title", "[Title]", "Prospect's job title"),
    ("{{email}}", "email", "[Email]", "Prospect's email"),
    ("{{phone}}", "phone", "[Phone]", "Prospect's phone number"),
]

@dataclass
class LeadContext:
    """The lead on the other end of the call."""
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    company: Optional[str] = None
    title: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, str]) -> "LeadContext":
        """Builds a lead from a mapping, ignoring unknown keys."""
        known = {field_name for _, field_name, _, _ in PLACEHOLDERS}
        return cls(**{k: v for k, v in data.items() if k in known})


def interpolate(text: str, lead: Optional[LeadContext]) -> str:
    """
    Replaces every supported placeholder with the lead's value.

    Empty fields render as a bracketed hint (e.g. "[Company]") so the rep
    sees the gap. Without a lead the text is returned unchanged.
    """
    if lead is None:
        return text
    for placeholder, field_name, fallback, _ in PLACEHOLDERS:
        text = text.replace(placeholder, getattr(lead, field_name) or fallback)
    return text


def interpolate_script(parsed: ParsedScript, lead: Optional[LeadContext]) -> ParsedScript:
    """Returns a copy of the parsed script with lead values filled in."""
    beats = [
        replace(
            beat,
            say_this=interpolate(beat.say_this, lead),
            branches=[
                ScriptBranch(
                    condition=interpolate(branch.condition, lead),
                    response=interpolate(branch.response, lead),
                    target_beat=branch.target_beat,
                )
                for branch in beat.branches
            ],
        )
        for beat in parsed.beats
    ]
    return ParsedScript(beats=beats, is_structured=parsed.is_structured)
