"""
Roster Codec

Turns the account roster into plain JSON-compatible data and back.

DESIGN DECISION: The habit variant is written as an explicit type tag
next to the shared habit fields, and decoding branches on that tag
before touching the variant-specific fields. The tag strings are the
compatibility surface of the file format:

    {"$type": "boolean", "id": 1, "name": ..., "history": [...]}
    {"$type": "quantitative", "id": 2, ..., "target_value": 8, "unit": "glasses"}

An unknown or missing tag is a hard error. We never guess a variant,
and we never drop a record we do not understand.
"""

from typing import Any

from pydantic import ValidationError

from habit_tracker.models.account import Account
from habit_tracker.models.habit import (
    BooleanVariant,
    Habit,
    HabitEntry,
    HabitKind,
    QuantitativeVariant,
)
from habit_tracker.services.storage.interface import (
    StorageDecodeError,
    UnknownHabitTypeError,
)


HABIT_TYPE_FIELD = "$type"
BOOLEAN_TYPE_TAG = HabitKind.BOOLEAN.value
QUANTITATIVE_TYPE_TAG = HabitKind.QUANTITATIVE.value

# Shared habit fields, in the order they are written
HABIT_FIELDS = [
    "id",
    "name",
    "description",
    "created_date",
]


# =============================================================================
# ENCODE
# =============================================================================

def encode_entry(entry: HabitEntry) -> dict[str, Any]:
    return entry.model_dump(mode="json")


def encode_habit(habit: Habit) -> dict[str, Any]:
    """Encode a habit with its type tag written first."""
    shared = habit.model_dump(mode="json", include=set(HABIT_FIELDS))

    record: dict[str, Any] = {HABIT_TYPE_FIELD: habit.kind.value}
    record.update((name, shared[name]) for name in HABIT_FIELDS)

    if habit.kind == HabitKind.QUANTITATIVE:
        record["target_value"] = habit.variant.target_value
        record["unit"] = habit.variant.unit

    record["history"] = [encode_entry(entry) for entry in habit.history]
    return record


def encode_account(account: Account) -> dict[str, Any]:
    return {
        "id": account.id,
        "username": account.username,
        "password": account.password,
        "habits": [encode_habit(habit) for habit in account.habits],
    }


def encode_accounts(accounts: list[Account]) -> list[dict[str, Any]]:
    """Encode the whole roster."""
    return [encode_account(account) for account in accounts]


# =============================================================================
# DECODE
# =============================================================================

def _require_mapping(record: Any, what: str) -> dict[str, Any]:
    if not isinstance(record, dict):
        raise StorageDecodeError(
            f"Expected a {what} object, got {type(record).__name__}"
        )
    return record


def decode_variant(record: dict[str, Any]):
    """Pick and build the variant payload from the record's type tag."""
    type_tag = record.get(HABIT_TYPE_FIELD)

    if type_tag == BOOLEAN_TYPE_TAG:
        return BooleanVariant()
    elif type_tag == QUANTITATIVE_TYPE_TAG:
        if "target_value" not in record:
            raise StorageDecodeError(
                f"Quantitative habit {record.get('id')!r} is missing target_value"
            )
        return QuantitativeVariant(
            target_value=record["target_value"],
            unit=record.get("unit", ""),
        )

    raise UnknownHabitTypeError(type_tag)


def decode_habit(record: Any) -> Habit:
    """Decode one habit record, honouring its type tag."""
    record = _require_mapping(record, "habit")
    try:
        variant = decode_variant(record)
        history = [
            HabitEntry.model_validate(_require_mapping(item, "entry"))
            for item in record.get("history") or []
        ]
        return Habit(
            id=record["id"],
            name=record["name"],
            description=record.get("description", ""),
            created_date=record["created_date"],
            variant=variant,
            history=history,
        )
    except KeyError as e:
        raise StorageDecodeError(
            f"Habit record {record.get('id')!r} is missing field {e.args[0]!r}"
        ) from e
    except ValidationError as e:
        raise StorageDecodeError(
            f"Invalid habit record {record.get('id')!r}: {e}"
        ) from e


def decode_account(record: Any) -> Account:
    record = _require_mapping(record, "account")
    try:
        return Account(
            id=record["id"],
            username=record["username"],
            password=record["password"],
            habits=[decode_habit(item) for item in record.get("habits") or []],
        )
    except KeyError as e:
        raise StorageDecodeError(
            f"Account record {record.get('id')!r} is missing field {e.args[0]!r}"
        ) from e
    except ValidationError as e:
        raise StorageDecodeError(
            f"Invalid account record {record.get('id')!r}: {e}"
        ) from e


def decode_accounts(data: Any) -> list[Account]:
    """Decode the whole roster. The document root must be a list or null."""
    if data is None:
        return []
    if not isinstance(data, list):
        raise StorageDecodeError(
            f"Expected a list of accounts, got {type(data).__name__}"
        )
    return [decode_account(item) for item in data]
