"""Encoding of intensity buffers to grayscale image files."""

from __future__ import annotations

import os
import stat
import tempfile
from pathlib import Path
from typing import Optional, Union

import numpy as np
import PIL.Image

DEFAULT_FORMAT = "PNG"


def _pil_format_name(ext: str) -> str:
    upper = ext.upper()
    if upper == "JPG":
        return "JPEG"
    if upper == "TIF":
        return "TIFF"
    return upper


def resolve_format(path: Path, image_format: Optional[str] = None) -> str:
    """Pick the Pillow format name from ``image_format``, else from the file suffix.

    Suffixes Pillow does not know fall back to PNG.
    """

    if image_format:
        return _pil_format_name(image_format.lower().lstrip("."))
    return PIL.Image.registered_extensions().get(path.suffix.lower(), DEFAULT_FORMAT)


def _output_mode(path: Path) -> int:
    """Keep the mode of a file being replaced, else honour the umask."""

    try:
        return stat.S_IMODE(os.stat(path).st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def write_image(
    path: Union[str, Path],
    pixels: np.ndarray,
    bounds: tuple[int, int],
    image_format: Optional[str] = None,
) -> Path:
    """Write ``pixels`` as an 8-bit grayscale image of size ``bounds`` to ``path``.

    The image is encoded into a temporary file next to ``path`` and moved
    into place once complete, so a failed write leaves no file behind.
    """

    width, height = bounds
    assert len(pixels) == width * height, (
        f"buffer holds {len(pixels)} pixels, expected {width}x{height}"
    )

    output_path = Path(path)
    pil_format = resolve_format(output_path, image_format)
    gray = np.asarray(pixels, dtype=np.uint8).reshape(height, width)
    image = PIL.Image.fromarray(gray)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{output_path.name}.", dir=output_path.parent)
    try:
        with os.fdopen(fd, "wb") as handle:
            image.save(handle, format=pil_format)
        os.chmod(tmp_name, _output_mode(output_path))
        os.replace(tmp_name, output_path)
    except BaseException:
        os.unlink(tmp_name)
        raise

    return output_path
