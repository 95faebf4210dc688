"""Staff models - records produced by the scanner and the board document built from them."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class StaffMember:
    """A person derived from one photo file."""

    name: str
    job_title: Optional[str]
    image_path: str
    is_intern: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'job_title': self.job_title,
            'image_path': self.image_path,
            'is_intern': self.is_intern,
        }


@dataclass
class StaffSection:
    """A titled group of staff members, typically one scanned directory."""

    title: str
    members: List[StaffMember] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'title': self.title,
            'members': [member.to_dict() for member in self.members],
        }


@dataclass
class StaffData:
    """The full staff board: a title and its sections."""

    title: str
    sections: List[StaffSection] = field(default_factory=list)

    @property
    def total_members(self) -> int:
        return sum(len(section.members) for section in self.sections)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'title': self.title,
            'sections': [section.to_dict() for section in self.sections],
        }
