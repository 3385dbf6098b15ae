#!/usr/bin/env python3

"""Size and alignment resolution for DWARF type DIEs.

DWARF records the byte size of most types but not their alignment. This
resolver derives the alignment the way the platform ABI does:

    base/enum type      -> its own size
    pointer/reference   -> word size unless DW_AT_byte_size says otherwise
    typedef/qualifier   -> layout of the referenced type
    array               -> element alignment, element size * element count
    vector              -> its own size
    struct/class/union  -> largest member or base class alignment

Alignments derived from a size are capped at the platform maximum alignment.
An explicit DW_AT_alignment (C11 _Alignas, C++ alignas) replaces the derived
value and is never capped.
"""

from elftools.dwarf.die import DIE

from ....infrastructure.logging import get_logger
from ...models.layout import VOID_LAYOUT, PlatformSizes, TypeLayout
from ...repositories.cache import LayoutCache
from ..analysis.layout_analyzer import effective_alignment
from .die_type_classifier import DIETypeClassifier

logger = get_logger(__name__)


class TypeLayoutResolver:
    """Resolves the storage layout of type DIEs, caching by DIE offset."""

    # Maximum nesting depth to prevent runaway recursion
    MAX_CHAIN_DEPTH = 64

    def __init__(self, platform: PlatformSizes, cache: LayoutCache | None = None):
        """Initialize resolver.

        Args:
            platform: Word size and maximum alignment of the target
            cache: Optional shared layout cache
        """
        self.platform = platform
        self.cache = cache if cache is not None else LayoutCache()

    def resolve(self, type_die: DIE | None) -> TypeLayout:
        """Resolve the layout of a type DIE.

        Args:
            type_die: Type DIE, or None for void

        Returns:
            Size and alignment of the type; VOID_LAYOUT when it cannot be
            resolved
        """
        if type_die is None:
            return VOID_LAYOUT
        return self._resolve(type_die, set(), 0)

    def resolve_member(self, member_die: DIE) -> TypeLayout:
        """Resolve the layout of a data member, honouring alignas on the member."""
        layout = self.resolve(DIETypeClassifier.get_type_die(member_die))
        explicit = DIETypeClassifier.get_int(member_die, "DW_AT_alignment")
        if explicit:
            return TypeLayout(layout.size, max(layout.alignment, explicit))
        return layout

    def _resolve(self, die: DIE, in_progress: set[int], depth: int) -> TypeLayout:
        cached = self.cache.get(die.offset)
        if cached is not None:
            return cached

        if die.offset in in_progress:
            logger.warning(f"Circular type reference detected at offset 0x{die.offset:x}")
            return VOID_LAYOUT
        if depth >= self.MAX_CHAIN_DEPTH:
            logger.warning(
                f"Max chain depth {self.MAX_CHAIN_DEPTH} reached at offset 0x{die.offset:x}"
            )
            return VOID_LAYOUT

        in_progress.add(die.offset)
        try:
            layout = self._compute(die, in_progress, depth + 1)
        finally:
            in_progress.discard(die.offset)

        explicit = DIETypeClassifier.get_int(die, "DW_AT_alignment")
        if explicit:
            layout = TypeLayout(layout.size, explicit)

        self.cache.put(die.offset, layout)
        logger.debug(
            f"Resolved {die.tag} at 0x{die.offset:x}: "
            f"size={layout.size}, alignment={layout.alignment}"
        )
        return layout

    def _compute(self, die: DIE, in_progress: set[int], depth: int) -> TypeLayout:
        byte_size = DIETypeClassifier.get_int(die, "DW_AT_byte_size")

        if DIETypeClassifier.is_scalar(die):
            if byte_size is None:
                # Enumerations may only name their underlying type
                return self._resolve_target(die, in_progress, depth)
            return self._self_aligned(byte_size)

        if DIETypeClassifier.is_pointer(die):
            size = byte_size if byte_size is not None else self.platform.word_size
            return self._self_aligned(size)

        if DIETypeClassifier.is_transparent(die):
            return self._resolve_target(die, in_progress, depth)

        if die.tag == "DW_TAG_array_type":
            return self._compute_array(die, byte_size, in_progress, depth)

        if DIETypeClassifier.is_aggregate(die):
            return TypeLayout(byte_size or 0, self._aggregate_alignment(die, in_progress, depth))

        logger.debug(
            f"Unhandled tag {die.tag} at 0x{die.offset:x} during layout resolution"
        )
        return self._self_aligned(byte_size or 0)

    def _self_aligned(self, size: int) -> TypeLayout:
        return TypeLayout(size, effective_alignment(size, self.platform.max_align))

    def _resolve_target(self, die: DIE, in_progress: set[int], depth: int) -> TypeLayout:
        target = DIETypeClassifier.get_type_die(die)
        if target is None:
            return VOID_LAYOUT
        return self._resolve(target, in_progress, depth)

    def _compute_array(
        self,
        die: DIE,
        byte_size: int | None,
        in_progress: set[int],
        depth: int,
    ) -> TypeLayout:
        element = self._resolve_target(die, in_progress, depth)

        count = 1
        for child in die.iter_children():
            if child.tag == "DW_TAG_subrange_type":
                count *= self._subrange_count(child)

        size = byte_size if byte_size is not None else element.size * count
        if DIETypeClassifier.has_flag(die, "DW_AT_GNU_vector"):
            # SIMD vectors are aligned to their full size
            return TypeLayout(size, max(size, 1))
        return TypeLayout(size, element.alignment)

    @staticmethod
    def _subrange_count(subrange: DIE) -> int:
        """Number of elements in one array dimension (0 when unknown)."""
        for attribute in ("DW_AT_count", "DW_AT_upper_bound"):
            attr = subrange.attributes.get(attribute)
            if attr is None:
                continue
            form = attr.form
            if isinstance(form, str) and (
                form.startswith("DW_FORM_ref") or form == "DW_FORM_exprloc"
            ):
                # Variable length array
                return 0
            if attribute == "DW_AT_count":
                return max(DIETypeClassifier.get_int(subrange, attribute, 0) or 0, 0)
            upper = DIETypeClassifier.get_int(subrange, attribute, -1)
            lower = DIETypeClassifier.get_int(subrange, "DW_AT_lower_bound", 0) or 0
            return max((upper if upper is not None else -1) - lower + 1, 0)

        # Flexible array member
        return 0

    def _aggregate_alignment(self, die: DIE, in_progress: set[int], depth: int) -> int:
        alignment = 1
        for child in die.iter_children():
            if DIETypeClassifier.is_data_member(child) or child.tag == "DW_TAG_inheritance":
                target = DIETypeClassifier.get_type_die(child)
                if target is None:
                    continue
                child_alignment = self._resolve(target, in_progress, depth).alignment
                explicit = DIETypeClassifier.get_int(child, "DW_AT_alignment")
                alignment = max(alignment, child_alignment, explicit or 1)
        return alignment
