"""OData query parameters."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional
from urllib.parse import urlencode


@dataclass(slots=True)
class Parameters:
    """
    OData system query options plus custom query parameters.

    Example:
        >>> opts = (Parameters()
        ...         .select(["Id", "Name"])
        ...         .expand(["Children"])
        ...         .filter(["isof('ShareFile.Api.Models.Folder')"])
        ...         .order_by(["Name asc"])
        ...         .top(10)
        ...         .skip(20))

    Setters replace the option, `*_add` methods append to it. All of them
    return the instance so calls can be chained.
    """

    custom_options: list[tuple[str, str]] = field(default_factory=list)
    select_options: Optional[list[str]] = None
    expand_options: Optional[list[str]] = None
    filter_options: Optional[list[str]] = None
    order_by_options: Optional[list[str]] = None
    top_value: Optional[int] = None
    skip_value: Optional[int] = None

    def custom(self, options: Iterable[tuple[str, object]]) -> Parameters:
        self.custom_options = [(k, _to_str(v)) for k, v in options]
        return self

    def custom_add(self, key: str, value: object) -> Parameters:
        self.custom_options.append((key, _to_str(value)))
        return self

    def select(self, fields: Iterable[str]) -> Parameters:
        self.select_options = list(fields)
        return self

    def select_add(self, value: str) -> Parameters:
        self.select_options = (self.select_options or []) + [value]
        return self

    def expand(self, fields: Iterable[str]) -> Parameters:
        self.expand_options = list(fields)
        return self

    def expand_add(self, value: str) -> Parameters:
        self.expand_options = (self.expand_options or []) + [value]
        return self

    def filter(self, expressions: Iterable[str]) -> Parameters:
        self.filter_options = list(expressions)
        return self

    def filter_add(self, value: str) -> Parameters:
        self.filter_options = (self.filter_options or []) + [value]
        return self

    def order_by(self, fields: Iterable[str]) -> Parameters:
        self.order_by_options = list(fields)
        return self

    def order_by_add(self, value: str) -> Parameters:
        self.order_by_options = (self.order_by_options or []) + [value]
        return self

    def top(self, value: int) -> Parameters:
        self.top_value = int(value)
        return self

    def skip(self, value: int) -> Parameters:
        self.skip_value = int(value)
        return self

    def copy(self) -> Parameters:
        return Parameters(
            custom_options=list(self.custom_options),
            select_options=_copy_list(self.select_options),
            expand_options=_copy_list(self.expand_options),
            filter_options=_copy_list(self.filter_options),
            order_by_options=_copy_list(self.order_by_options),
            top_value=self.top_value,
            skip_value=self.skip_value,
        )

    def to_pairs(self) -> list[tuple[str, str]]:
        """Return query pairs in a stable order (custom options first)."""
        pairs: list[tuple[str, str]] = list(self.custom_options)

        if self.select_options is not None:
            pairs.append(("$select", ",".join(self.select_options)))
        if self.expand_options is not None:
            pairs.append(("$expand", ",".join(self.expand_options)))
        if self.filter_options is not None:
            pairs.append(("$filter", " and ".join(self.filter_options)))
        if self.order_by_options is not None:
            pairs.append(("$orderBy", ",".join(self.order_by_options)))
        if self.top_value is not None:
            pairs.append(("$top", str(self.top_value)))
        if self.skip_value is not None:
            pairs.append(("$skip", str(self.skip_value)))

        return pairs

    def to_query(self) -> str:
        """URL-encoded query string (without the leading '?')."""
        return urlencode(self.to_pairs())

    def __str__(self) -> str:
        return self.to_query()


def bool_to_string(value: bool) -> str:
    return "true" if value else "false"


def _to_str(value: object) -> str:
    if isinstance(value, bool):
        return bool_to_string(value)
    return str(value)


def _copy_list(items: Optional[list[str]]) -> Optional[list[str]]:
    return list(items) if items is not None else None
