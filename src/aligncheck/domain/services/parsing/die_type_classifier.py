#!/usr/bin/env python3

"""DIE type classification and attribute access utilities.

Use these helpers instead of checking tags or decoding attributes inline so
record enumeration and type layout resolution classify DIEs the same way.
"""

from typing import Any

from elftools.dwarf.die import DIE

from ....infrastructure.logging import get_logger
from ...models.dwarf.tag_constants import (
    AGGREGATE_TAGS,
    BITFIELD_ATTRIBUTES,
    POINTER_TAGS,
    RECORD_TAGS,
    SCALAR_TAGS,
    SCOPE_TAGS,
    TRANSPARENT_TYPE_TAGS,
)

logger = get_logger(__name__)


class DIETypeClassifier:
    """Classifies DIE types and reads common attributes.

    All methods are static as they operate on DIE objects without state.
    """

    @staticmethod
    def get_name(die: DIE) -> str | None:
        """Get the decoded DW_AT_name of a DIE, or None if it has none."""
        name_attr = die.attributes.get("DW_AT_name")
        if name_attr is None:
            return None
        value = name_attr.value
        if isinstance(value, bytes):
            return value.decode("utf-8", errors="replace")
        return str(value)

    @staticmethod
    def get_int(die: DIE, attribute: str, default: int | None = None) -> int | None:
        """Get an integer attribute value.

        Args:
            die: DIE to read
            attribute: Attribute name, e.g. "DW_AT_byte_size"
            default: Value returned when the attribute is missing or not numeric

        Returns:
            Attribute value as int, or default
        """
        attr = die.attributes.get(attribute)
        if attr is None:
            return default
        value: Any = attr.value
        if isinstance(value, bool):
            return int(value)
        if isinstance(value, int):
            return value
        # Location expressions such as [DW_OP_plus_uconst, 8] (DWARF 2)
        if isinstance(value, list) and value and isinstance(value[-1], int):
            return value[-1]
        logger.debug(
            f"Non-numeric {attribute} at 0x{die.offset:x}: {value!r}",
        )
        return default

    @staticmethod
    def has_flag(die: DIE, attribute: str) -> bool:
        """Check whether a flag attribute is present and set."""
        attr = die.attributes.get(attribute)
        return attr is not None and bool(attr.value)

    @staticmethod
    def is_record(die: DIE) -> bool:
        """Check if DIE is a struct or class whose fields can be reordered."""
        return die.tag in RECORD_TAGS

    @staticmethod
    def is_aggregate(die: DIE) -> bool:
        """Check if DIE is a struct, class or union."""
        return die.tag in AGGREGATE_TAGS

    @staticmethod
    def is_scope(die: DIE) -> bool:
        """Check if DIE contributes a component to qualified names."""
        return die.tag in SCOPE_TAGS

    @staticmethod
    def is_pointer(die: DIE) -> bool:
        """Check if DIE is pointer-like (pointer, reference, pointer-to-member)."""
        return die.tag in POINTER_TAGS

    @staticmethod
    def is_transparent(die: DIE) -> bool:
        """Check if DIE is a typedef or qualifier sharing its target's layout."""
        return die.tag in TRANSPARENT_TYPE_TAGS

    @staticmethod
    def is_scalar(die: DIE) -> bool:
        """Check if DIE is a self-aligned scalar type."""
        return die.tag in SCALAR_TAGS

    @staticmethod
    def is_declaration(die: DIE) -> bool:
        """Check if DIE is only a declaration (incomplete type)."""
        return DIETypeClassifier.has_flag(die, "DW_AT_declaration")

    @staticmethod
    def is_data_member(die: DIE) -> bool:
        """Check if DIE is a non-static data member.

        Before DWARF 5, static data members are DW_TAG_member entries marked
        external or as declarations.
        """
        if die.tag != "DW_TAG_member":
            return False
        return not (
            DIETypeClassifier.has_flag(die, "DW_AT_external")
            or DIETypeClassifier.has_flag(die, "DW_AT_declaration")
        )

    @staticmethod
    def is_bitfield(die: DIE) -> bool:
        """Check if a member DIE is a bitfield."""
        return any(attr in die.attributes for attr in BITFIELD_ATTRIBUTES)

    @staticmethod
    def get_type_die(die: DIE) -> DIE | None:
        """Follow DW_AT_type, returning None for void or broken references."""
        if "DW_AT_type" not in die.attributes:
            return None
        try:
            return die.get_DIE_from_attribute("DW_AT_type")
        except Exception as e:
            logger.debug(f"Could not resolve DW_AT_type from 0x{die.offset:x}: {e}")
            return None
