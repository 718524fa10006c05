"""Split OpenAPI path templates into literal segments and parameter names.

A path such as ``/stores/{storeId}/pets/{petId}`` becomes::

    PathTemplate(
        path="/stores/{storeId}/pets/{petId}",
        param_names=("storeId", "petId"),
        segments=("/stores/", "/pets/", ""),
    )

A placeholder is ``{`` followed by one or more characters other than ``}``
and then ``}``. Empty braces ``{}`` are not a placeholder and stay literal.
There is always exactly one more segment than there are parameter
occurrences, and interleaving them reproduces the original path.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict


# Capturing variant for names; non-capturing variant for splitting so the
# names do not end up in the segment list.
_PARAM_NAME_RE = re.compile(r"\{([^}]+)\}")
_PLACEHOLDER_RE = re.compile(r"\{[^}]+\}")


class PathTemplate(BaseModel):
    """A parsed path template.

    ``param_names`` lists every placeholder occurrence left to right,
    duplicates included; :attr:`unique_param_names` collapses repeats.
    """

    model_config = ConfigDict(frozen=True)

    path: str
    param_names: tuple[str, ...] = ()
    segments: tuple[str, ...] = ("",)

    @property
    def is_literal(self) -> bool:
        """``True`` when the path has no placeholders."""
        return not self.param_names

    @property
    def unique_param_names(self) -> tuple[str, ...]:
        """Parameter names in first-occurrence order, without repeats."""
        return tuple(dict.fromkeys(self.param_names))

    def render(self, values: dict[str, str]) -> str:
        """Substitute *values* for the placeholders.

        Raises:
            KeyError: If a parameter has no value.
        """
        parts = [self.segments[0]]
        for name, segment in zip(self.param_names, self.segments[1:]):
            parts.append(values[name])
            parts.append(segment)
        return "".join(parts)


def extract_path_params(path: str) -> list[str]:
    """Return the placeholder names in *path*, in order of occurrence.

    Example::

        >>> extract_path_params("/users/{userId}/posts/{postId}")
        ['userId', 'postId']
        >>> extract_path_params("/health")
        []
    """
    return _PARAM_NAME_RE.findall(path)


def build_path_template(path: str) -> PathTemplate:
    """Parse *path* into a :class:`PathTemplate`."""
    return PathTemplate(
        path=path,
        param_names=tuple(extract_path_params(path)),
        segments=tuple(_PLACEHOLDER_RE.split(path)),
    )
