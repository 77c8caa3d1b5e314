"""Translation of ``graphicsmagick`` params into ``gm mogrify`` arguments.

Each ``build_*`` function reads its own params and appends tokens to an
:class:`ArgumentList`. :func:`build_arguments` runs them in the order the
command line expects; see the GraphicsMagick documentation for the meaning
of each flag.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Iterator, Sequence

from ..errors import ParamError
from ..params import Params

GRAVITIES = {
    "n": "North",
    "s": "South",
    "e": "East",
    "w": "West",
    "ne": "NorthEast",
    "se": "SouthEast",
    "nw": "NorthWest",
    "sw": "SouthWest",
}
DEFAULT_GRAVITY = "Center"

# Appended to the resize geometry in this order.
RESIZE_MODIFIERS = (
    ("fill", "^"),
    ("ignore_ratio", "!"),
    ("only_shrink_larger", ">"),
    ("only_enlarge_smaller", "<"),
)

JPEG_FORMATS = {"jpeg", "jpg"}

PARAM_NAMES = frozenset(
    {
        "width",
        "height",
        "fill",
        "ignore_ratio",
        "only_shrink_larger",
        "only_enlarge_smaller",
        "background",
        "gravity",
        "extent",
        "crop",
        "rotate",
        "monochrome",
        "grey",
        "trim",
        "no_interlace",
        "flip",
        "flop",
        "format",
        "quality",
    }
)


class ArgumentList:
    def __init__(self, tokens: Sequence[str] = ()) -> None:
        self._tokens: deque[str] = deque(tokens)

    def append(self, *tokens: str) -> None:
        self._tokens.extend(tokens)

    def push_front(self, token: str) -> None:
        self._tokens.appendleft(token)

    def to_list(self) -> list[str]:
        return list(self._tokens)

    def __len__(self) -> int:
        return len(self._tokens)

    def __iter__(self) -> Iterator[str]:
        return iter(self._tokens)

    def __repr__(self) -> str:
        return f"ArgumentList({list(self._tokens)!r})"


@dataclass
class BuildResult:
    arguments: ArgumentList
    format: str
    format_specified: bool


def _get_flag(params: Params, name: str) -> bool:
    if not params.has(name):
        return False
    return params.get_bool(name)


def _get_dimension(params: Params, name: str) -> int:
    if not params.has(name):
        return 0
    value = params.get_int(name)
    if value < 0:
        raise ParamError(name, "must be greater than or equal to 0")
    return value


def build_resize(arguments: ArgumentList, params: Params) -> tuple[int, int]:
    width = _get_dimension(params, "width")
    height = _get_dimension(params, "height")
    if width == 0 and height == 0:
        return 0, 0
    geometry = f"{width or ''}x{height or ''}"
    for name, modifier in RESIZE_MODIFIERS:
        if _get_flag(params, name):
            geometry += modifier
    arguments.append("-resize", geometry)
    return width, height


def build_background(arguments: ArgumentList, params: Params) -> None:
    if not params.has("background"):
        return
    background = params.get_string("background")
    if len(background) not in (3, 4, 6, 8):
        raise ParamError("background", "length must be equal to 3, 4, 6 or 8")
    if any(char not in "0123456789abcdef" for char in background):
        raise ParamError("background", "must only contain characters in 0-9a-f")
    arguments.append("-background", f"#{background}")


def build_gravity(arguments: ArgumentList, params: Params) -> None:
    gravity = params.get_string("gravity") if params.has("gravity") else ""
    if not gravity:
        translated = DEFAULT_GRAVITY
    else:
        translated = GRAVITIES.get(gravity)
        if translated is None:
            raise ParamError("gravity", "must be one of n, s, e, w, ne, se, nw or sw")
    arguments.append("-gravity", translated)


def build_extent(arguments: ArgumentList, params: Params, width: int, height: int) -> None:
    if width == 0 or height == 0:
        return
    if _get_flag(params, "extent"):
        arguments.append("-extent", f"{width}x{height}")


def build_crop(arguments: ArgumentList, params: Params) -> None:
    if not params.has("crop"):
        return
    fields = params.get_string("crop").split(",")
    if len(fields) not in (2, 4):
        raise ParamError("crop", "parameters number mismatch")
    try:
        values = [int(field) for field in fields]
    except ValueError as exc:
        raise ParamError("crop", "must contain integers") from exc
    geometry = f"{values[0]}x{values[1]}"
    if len(values) == 4:
        geometry += f"+{values[2]}+{values[3]}"
    arguments.append("-crop", geometry, "+repage")


def build_rotate(arguments: ArgumentList, params: Params) -> None:
    if not params.has("rotate"):
        return
    rotate = params.get_int("rotate")
    if rotate == 0:
        return
    if rotate < 0 or rotate > 359:
        raise ParamError("rotate", "must be between 0 and 359")
    arguments.append("-rotate", str(rotate))


def build_monochrome(arguments: ArgumentList, params: Params) -> None:
    if _get_flag(params, "monochrome"):
        arguments.append("-monochrome")


def build_grey(arguments: ArgumentList, params: Params) -> None:
    if _get_flag(params, "grey"):
        arguments.append("-colorspace", "GRAY")


def build_trim(arguments: ArgumentList, params: Params) -> None:
    # -trim has to run before every other operation.
    if _get_flag(params, "trim"):
        arguments.push_front("-trim")


def build_interlace(arguments: ArgumentList, params: Params) -> None:
    if not _get_flag(params, "no_interlace"):
        arguments.append("-interlace", "Line")


def build_flip(arguments: ArgumentList, params: Params) -> None:
    if _get_flag(params, "flip"):
        arguments.append("-flip")


def build_flop(arguments: ArgumentList, params: Params) -> None:
    if _get_flag(params, "flop"):
        arguments.append("-flop")


def build_format(
    arguments: ArgumentList,
    params: Params,
    source_format: str,
    allowed_formats: Sequence[str] | None = None,
) -> tuple[str, bool]:
    """Return the resolved format and whether it was requested explicitly."""
    if not params.has("format"):
        return source_format, False
    fmt = params.get_string("format")
    if not (fmt.isascii() and fmt.isalnum()):
        raise ParamError("format", "must be a non-empty alphanumeric format name")
    if allowed_formats is not None and fmt not in allowed_formats:
        raise ParamError("format", "not allowed")
    arguments.append("-format", fmt)
    return fmt, True


def build_quality(arguments: ArgumentList, params: Params, fmt: str) -> None:
    if not params.has("quality"):
        return
    quality = params.get_int("quality")
    if quality < 0:
        raise ParamError("quality", "must be greater than or equal to 0")
    if fmt.lower() in JPEG_FORMATS and quality > 100:
        raise ParamError("quality", "must be between 0 and 100")
    arguments.append("-quality", str(quality))


def build_arguments(
    params: Params,
    source_format: str,
    allowed_formats: Sequence[str] | None = None,
) -> BuildResult:
    """Build the mogrify flags for ``params``, without the verb or file path.

    Raises :class:`ParamError` on the first invalid param. A bag without any
    known param yields an empty list so the caller can skip processing.
    """
    arguments = ArgumentList()
    if not any(params.has(name) for name in PARAM_NAMES):
        return BuildResult(arguments=arguments, format=source_format, format_specified=False)

    width, height = build_resize(arguments, params)
    build_background(arguments, params)
    build_gravity(arguments, params)
    build_extent(arguments, params, width, height)
    build_crop(arguments, params)
    build_rotate(arguments, params)
    build_monochrome(arguments, params)
    build_grey(arguments, params)
    build_trim(arguments, params)
    build_interlace(arguments, params)
    build_flip(arguments, params)
    build_flop(arguments, params)
    fmt, format_specified = build_format(arguments, params, source_format, allowed_formats)
    build_quality(arguments, params, fmt)
    return BuildResult(arguments=arguments, format=fmt, format_specified=format_specified)
