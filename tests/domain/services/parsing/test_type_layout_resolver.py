#!/usr/bin/env python3

"""Unit tests for TypeLayoutResolver with mocked DIEs."""

from collections.abc import Callable
from unittest.mock import Mock

import pytest

from aligncheck.domain.models.layout import VOID_LAYOUT, PlatformSizes, TypeLayout
from aligncheck.domain.services.parsing import TypeLayoutResolver


class TestTypeLayoutResolver:
    """Test suite for type size and alignment resolution."""

    @pytest.fixture
    def resolver(self, platform: PlatformSizes) -> TypeLayoutResolver:
        """Resolver for a 64-bit platform."""
        return TypeLayoutResolver(platform)

    @pytest.fixture
    def int_die(self, die_factory: Callable[..., Mock]) -> Mock:
        """4-byte int base type."""
        return die_factory("DW_TAG_base_type", 0x100, "int", {"DW_AT_byte_size": 4})

    @pytest.fixture
    def double_die(self, die_factory: Callable[..., Mock]) -> Mock:
        """8-byte double base type."""
        return die_factory("DW_TAG_base_type", 0x110, "double", {"DW_AT_byte_size": 8})

    @pytest.fixture
    def char_die(self, die_factory: Callable[..., Mock]) -> Mock:
        """1-byte char base type."""
        return die_factory("DW_TAG_base_type", 0x120, "char", {"DW_AT_byte_size": 1})

    @pytest.mark.unit
    def test_void_resolves_to_empty_layout(self, resolver: TypeLayoutResolver) -> None:
        """Test a missing type is void."""
        assert resolver.resolve(None) == VOID_LAYOUT

    @pytest.mark.unit
    def test_base_types_are_self_aligned(
        self, resolver: TypeLayoutResolver, int_die: Mock, char_die: Mock
    ) -> None:
        """Test base types use their size as alignment."""
        assert resolver.resolve(int_die) == TypeLayout(4, 4)
        assert resolver.resolve(char_die) == TypeLayout(1, 1)

    @pytest.mark.unit
    def test_base_type_alignment_is_capped(
        self, resolver: TypeLayoutResolver, die_factory: Callable[..., Mock]
    ) -> None:
        """Test a 16-byte long double is capped at 8-byte alignment."""
        long_double = die_factory(
            "DW_TAG_base_type", 0x130, "long double", {"DW_AT_byte_size": 16}
        )
        assert resolver.resolve(long_double) == TypeLayout(16, 8)

    @pytest.mark.unit
    def test_pointer_uses_word_size(self, die_factory: Callable[..., Mock], int_die: Mock) -> None:
        """Test pointers without DW_AT_byte_size take the platform word size."""
        pointer = die_factory("DW_TAG_pointer_type", 0x200, type_die=int_die)

        wide = TypeLayoutResolver(PlatformSizes(word_size=8, max_align=8))
        narrow = TypeLayoutResolver(PlatformSizes(word_size=4, max_align=4))

        assert wide.resolve(pointer) == TypeLayout(8, 8)
        assert narrow.resolve(pointer) == TypeLayout(4, 4)

    @pytest.mark.unit
    def test_pointer_byte_size_wins(
        self, resolver: TypeLayoutResolver, die_factory: Callable[..., Mock]
    ) -> None:
        """Test an explicit pointer byte size is used."""
        pointer = die_factory("DW_TAG_pointer_type", 0x210, attributes={"DW_AT_byte_size": 4})
        assert resolver.resolve(pointer) == TypeLayout(4, 4)

    @pytest.mark.unit
    def test_typedef_and_qualifier_chain(
        self, resolver: TypeLayoutResolver, die_factory: Callable[..., Mock], char_die: Mock
    ) -> None:
        """Test typedef -> const -> volatile -> char resolves to char."""
        volatile = die_factory("DW_TAG_volatile_type", 0x300, type_die=char_die)
        const = die_factory("DW_TAG_const_type", 0x310, type_die=volatile)
        typedef = die_factory("DW_TAG_typedef", 0x320, "byte_t", type_die=const)

        assert resolver.resolve(typedef) == TypeLayout(1, 1)

    @pytest.mark.unit
    def test_qualifier_without_target_is_void(
        self, resolver: TypeLayoutResolver, die_factory: Callable[..., Mock]
    ) -> None:
        """Test const void resolves to the void layout."""
        const_void = die_factory("DW_TAG_const_type", 0x330)
        assert resolver.resolve(const_void) == VOID_LAYOUT

    @pytest.mark.unit
    def test_multidimensional_array(
        self, resolver: TypeLayoutResolver, die_factory: Callable[..., Mock], int_die: Mock
    ) -> None:
        """Test int[3][2] is 24 bytes aligned like int."""
        rows = die_factory("DW_TAG_subrange_type", 0x401, attributes={"DW_AT_upper_bound": 2})
        cols = die_factory("DW_TAG_subrange_type", 0x402, attributes={"DW_AT_count": 2})
        array = die_factory("DW_TAG_array_type", 0x400, type_die=int_die, children=[rows, cols])

        assert resolver.resolve(array) == TypeLayout(24, 4)

    @pytest.mark.unit
    def test_array_lower_bound(
        self, resolver: TypeLayoutResolver, die_factory: Callable[..., Mock], char_die: Mock
    ) -> None:
        """Test a subrange with a lower bound counts upper - lower + 1 elements."""
        subrange = die_factory(
            "DW_TAG_subrange_type",
            0x411,
            attributes={"DW_AT_lower_bound": 1, "DW_AT_upper_bound": 10},
        )
        array = die_factory("DW_TAG_array_type", 0x410, type_die=char_die, children=[subrange])

        assert resolver.resolve(array) == TypeLayout(10, 1)

    @pytest.mark.unit
    def test_flexible_array_member(
        self, resolver: TypeLayoutResolver, die_factory: Callable[..., Mock], int_die: Mock
    ) -> None:
        """Test an array without bounds occupies no storage."""
        subrange = die_factory("DW_TAG_subrange_type", 0x421)
        array = die_factory("DW_TAG_array_type", 0x420, type_die=int_die, children=[subrange])

        assert resolver.resolve(array) == TypeLayout(0, 4)

    @pytest.mark.unit
    def test_variable_length_array(
        self, resolver: TypeLayoutResolver, die_factory: Callable[..., Mock], int_die: Mock
    ) -> None:
        """Test a bound referring to another DIE counts as zero elements."""
        subrange = die_factory("DW_TAG_subrange_type", 0x431, attributes={"DW_AT_upper_bound": 0x999})
        subrange.attributes["DW_AT_upper_bound"].form = "DW_FORM_ref4"
        array = die_factory("DW_TAG_array_type", 0x430, type_die=int_die, children=[subrange])

        assert resolver.resolve(array).size == 0

    @pytest.mark.unit
    def test_array_byte_size_wins(
        self, resolver: TypeLayoutResolver, die_factory: Callable[..., Mock], int_die: Mock
    ) -> None:
        """Test DW_AT_byte_size on the array overrides the computed size."""
        subrange = die_factory("DW_TAG_subrange_type", 0x441, attributes={"DW_AT_count": 2})
        array = die_factory(
            "DW_TAG_array_type",
            0x440,
            attributes={"DW_AT_byte_size": 12},
            type_die=int_die,
            children=[subrange],
        )

        assert resolver.resolve(array) == TypeLayout(12, 4)

    @pytest.mark.unit
    def test_struct_alignment_from_members(
        self,
        resolver: TypeLayoutResolver,
        die_factory: Callable[..., Mock],
        double_die: Mock,
        char_die: Mock,
    ) -> None:
        """Test a struct is aligned like its most aligned member."""
        member_d = die_factory("DW_TAG_member", 0x501, "d", type_die=double_die)
        member_c = die_factory("DW_TAG_member", 0x502, "c", type_die=char_die)
        struct = die_factory(
            "DW_TAG_structure_type",
            0x500,
            "Inner",
            {"DW_AT_byte_size": 16},
            children=[member_d, member_c],
        )

        assert resolver.resolve(struct) == TypeLayout(16, 8)

    @pytest.mark.unit
    def test_struct_static_members_ignored(
        self,
        resolver: TypeLayoutResolver,
        die_factory: Callable[..., Mock],
        double_die: Mock,
        char_die: Mock,
    ) -> None:
        """Test static members do not contribute to alignment."""
        static_member = die_factory(
            "DW_TAG_member", 0x511, "s_count", {"DW_AT_external": True}, type_die=double_die
        )
        member_c = die_factory("DW_TAG_member", 0x512, "c", type_die=char_die)
        struct = die_factory(
            "DW_TAG_structure_type",
            0x510,
            "Counted",
            {"DW_AT_byte_size": 1},
            children=[static_member, member_c],
        )

        assert resolver.resolve(struct) == TypeLayout(1, 1)

    @pytest.mark.unit
    def test_explicit_alignment(self, die_factory: Callable[..., Mock], char_die: Mock) -> None:
        """Test DW_AT_alignment overrides the derived alignment and is never capped."""
        member = die_factory("DW_TAG_member", 0x521, "c", type_die=char_die)
        struct = die_factory(
            "DW_TAG_structure_type",
            0x520,
            "Aligned",
            {"DW_AT_byte_size": 16, "DW_AT_alignment": 16},
            children=[member],
        )

        wide = TypeLayoutResolver(PlatformSizes(word_size=8, max_align=16))
        narrow = TypeLayoutResolver(PlatformSizes(word_size=8, max_align=8))

        assert wide.resolve(struct) == TypeLayout(16, 16)
        assert narrow.resolve(struct) == TypeLayout(16, 16)

    @pytest.mark.unit
    def test_enum_without_byte_size_uses_underlying_type(
        self, resolver: TypeLayoutResolver, die_factory: Callable[..., Mock], int_die: Mock
    ) -> None:
        """Test an enumeration falls back to its underlying type."""
        enum = die_factory("DW_TAG_enumeration_type", 0x600, "Color", type_die=int_die)
        assert resolver.resolve(enum) == TypeLayout(4, 4)

    @pytest.mark.unit
    def test_circular_reference(
        self, resolver: TypeLayoutResolver, die_factory: Callable[..., Mock]
    ) -> None:
        """Test a typedef referring to itself resolves to void."""
        typedef = die_factory("DW_TAG_typedef", 0x700, "loop_t")
        typedef.attributes["DW_AT_type"] = Mock(value=0x700, form="DW_FORM_ref4")
        typedef.get_DIE_from_attribute.return_value = typedef

        assert resolver.resolve(typedef) == VOID_LAYOUT

    @pytest.mark.unit
    def test_unhandled_tag(
        self, resolver: TypeLayoutResolver, die_factory: Callable[..., Mock]
    ) -> None:
        """Test unknown tags fall back to their byte size."""
        subroutine = die_factory("DW_TAG_subroutine_type", 0x800)
        assert resolver.resolve(subroutine) == VOID_LAYOUT

    @pytest.mark.unit
    def test_results_are_cached(self, resolver: TypeLayoutResolver, int_die: Mock) -> None:
        """Test repeated lookups hit the cache."""
        resolver.resolve(int_die)
        resolver.resolve(int_die)

        assert 0x100 in resolver.cache
        assert resolver.cache.hits == 1

    @pytest.mark.unit
    def test_member_alignas(
        self, resolver: TypeLayoutResolver, die_factory: Callable[..., Mock], char_die: Mock
    ) -> None:
        """Test alignas on a member raises its alignment."""
        member = die_factory(
            "DW_TAG_member", 0x901, "c", {"DW_AT_alignment": 8}, type_die=char_die
        )
        assert resolver.resolve_member(member) == TypeLayout(1, 8)

    @pytest.mark.unit
    def test_member_alignas_above_platform_maximum(
        self, resolver: TypeLayoutResolver, die_factory: Callable[..., Mock], char_die: Mock
    ) -> None:
        """Test alignas(64) on a member is kept as stated."""
        member = die_factory(
            "DW_TAG_member", 0x911, "c", {"DW_AT_alignment": 64}, type_die=char_die
        )
        assert resolver.resolve_member(member) == TypeLayout(1, 64)

    @pytest.mark.unit
    def test_struct_with_overaligned_member(
        self, resolver: TypeLayoutResolver, die_factory: Callable[..., Mock], char_die: Mock
    ) -> None:
        """Test a member's explicit alignment propagates to the enclosing struct."""
        member = die_factory(
            "DW_TAG_member", 0x921, "line", {"DW_AT_alignment": 64}, type_die=char_die
        )
        struct = die_factory(
            "DW_TAG_structure_type", 0x920, "CacheLine", {"DW_AT_byte_size": 64}, children=[member]
        )
        assert resolver.resolve(struct) == TypeLayout(64, 64)

    @pytest.mark.unit
    def test_vector_aligned_to_its_size(
        self, resolver: TypeLayoutResolver, die_factory: Callable[..., Mock], int_die: Mock
    ) -> None:
        """Test a GNU vector of four ints is 16-byte aligned."""
        subrange = die_factory("DW_TAG_subrange_type", 0xA01, attributes={"DW_AT_upper_bound": 3})
        vector = die_factory(
            "DW_TAG_array_type",
            0xA00,
            attributes={"DW_AT_GNU_vector": True},
            type_die=int_die,
            children=[subrange],
        )
        assert resolver.resolve(vector) == TypeLayout(16, 16)
