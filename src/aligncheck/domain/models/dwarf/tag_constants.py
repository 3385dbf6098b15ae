#!/usr/bin/env python3

"""DWARF tag constants and type classification.

Groups the tags the layout oracle has to tell apart when it walks record
definitions and computes the size and alignment of member types.
"""

# Record types whose field order can be analyzed
RECORD_TAGS = frozenset(
    {
        "DW_TAG_structure_type",  # C structs
        "DW_TAG_class_type",  # C++ classes
    }
)

# Aggregates whose alignment comes from their members
AGGREGATE_TAGS = frozenset(
    {
        "DW_TAG_structure_type",
        "DW_TAG_class_type",
        "DW_TAG_union_type",
    }
)

# Scopes that contribute to a record's qualified name
SCOPE_TAGS = frozenset(
    {
        "DW_TAG_namespace",
        "DW_TAG_structure_type",
        "DW_TAG_class_type",
        "DW_TAG_union_type",
    }
)

# Address-sized types: size is DW_AT_byte_size or the platform word size
POINTER_TAGS = frozenset(
    {
        "DW_TAG_pointer_type",  # *
        "DW_TAG_reference_type",  # &
        "DW_TAG_rvalue_reference_type",  # &&
        "DW_TAG_ptr_to_member_type",  # T Class::*
    }
)

# Wrappers that share the layout of the type they refer to
TRANSPARENT_TYPE_TAGS = frozenset(
    {
        "DW_TAG_typedef",
        "DW_TAG_const_type",
        "DW_TAG_volatile_type",
        "DW_TAG_restrict_type",
        "DW_TAG_atomic_type",
        "DW_TAG_immutable_type",
        "DW_TAG_packed_type",
        "DW_TAG_shared_type",
    }
)

# Scalar types sized by DW_AT_byte_size and self-aligned
SCALAR_TAGS = frozenset(
    {
        "DW_TAG_base_type",
        "DW_TAG_enumeration_type",
        "DW_TAG_unspecified_type",  # decltype(nullptr)
    }
)

# Member attributes that mark a bitfield
BITFIELD_ATTRIBUTES = frozenset(
    {
        "DW_AT_bit_size",
        "DW_AT_bit_offset",
        "DW_AT_data_bit_offset",
    }
)
