"""Render resolved fields as operator-facing text."""

from typing import Iterable, List

from .resolver import ResolvedField


FIELD_TEMPLATE = '> {tag_name}[{tag}] = {value_name}[{value}]'


def format_field(resolved: ResolvedField) -> str:
    """
    Format one field, e.g. "> Side[54] = SELL[2]".

    Missing names render empty; the raw tag and value are always shown.
    """
    return FIELD_TEMPLATE.format(
        tag_name=resolved.tag_name or '',
        tag=resolved.tag,
        value_name=resolved.value_name or '',
        value=resolved.value,
    )


def format_message(resolved: Iterable[ResolvedField]) -> List[str]:
    return [format_field(field) for field in resolved]
