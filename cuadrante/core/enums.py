from __future__ import annotations

import unicodedata
from enum import Enum


def fold(text: str | None) -> str:
    """Lower-case, accent-free form used for search and name collation."""
    if not text:
        return ""
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch)).casefold().strip()


class Role(str, Enum):
    """Puesto de trabajo. Declaration order is the roster ordering."""

    WAITER = "Camarero"
    MANAGER = "Encargado"
    COOK = "Cocinero"
    KITCHEN_ASSISTANT = "Ayudante de cocina"
    HEAD_COOK = "Jefe de cocina"

    @property
    def rank(self) -> int:
        return list(Role).index(self) + 1

    @classmethod
    def from_label(cls, label: str | None) -> Role | None:
        """Maps stored free text ("camarera", "Jefe de Cocina") onto a role, None if unknown."""
        text = fold(label)
        if not text:
            return None
        for role in cls:
            if text == fold(role.value):
                return role
        # more specific fragments first: "jefe de cocina" also contains "cocina"
        for fragment, role in _ROLE_FRAGMENTS:
            if fragment in text:
                return role
        return None


_ROLE_FRAGMENTS: list[tuple[str, Role]] = [
    ("jefe de cocina", Role.HEAD_COOK),
    ("ayudante", Role.KITCHEN_ASSISTANT),
    ("camarer", Role.WAITER),
    ("encargad", Role.MANAGER),
    ("cociner", Role.COOK),
    ("cocina", Role.COOK),
]

UNRANKED = len(Role) + 1


def role_rank(label: str | None) -> int:
    role = Role.from_label(label)
    return role.rank if role else UNRANKED


class ShiftType(str, Enum):
    """Kind of work period assigned to a person on one day."""

    MORNING = "Manana"
    AFTERNOON = "Tarde"
    EXTRA = "Extra"
    REST = "Descanso"

    @property
    def label(self) -> str:
        return SHIFT_LABELS[self]

    @classmethod
    def _missing_(cls, value):
        # accepts "Mañana", "manana", "TARDE"
        if isinstance(value, str):
            text = fold(value)
            for member in cls:
                if fold(member.value) == text:
                    return member
        return None


SHIFT_LABELS: dict[ShiftType, str] = {
    ShiftType.MORNING: "Mañana",
    ShiftType.AFTERNOON: "Tarde",
    ShiftType.EXTRA: "Extra",
    ShiftType.REST: "Descanso",
}


class PersonKind(str, Enum):
    EMPLOYEE = "empleado"
    EXTRA = "extra"


class PayslipStatus(str, Enum):
    PENDING = "Pendiente"
    UPLOADED = "Subida"
    SENT = "Enviada"
