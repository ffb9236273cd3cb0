"""Row-wise PackBits for image data.

TIFF compresses each scanline separately, so no run ever crosses a row
boundary. These helpers apply the codec the same way to numpy arrays and
Pillow images.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence, Tuple
import numpy as np
from PIL import Image
from packbits_codec.decoder import decompress
from packbits_codec.encoder import compress


def pack_rows(array: np.ndarray) -> List[bytes]:
    """Compress every row of an image array independently.

    Args:
        array: uint8 array of shape (H, W) or (H, W, C)

    Returns:
        List of H packed rows

    Raises:
        ValueError: If the array is not 2D/3D uint8
    """
    if array.dtype != np.uint8:
        raise ValueError(f"Image array must have dtype uint8, got {array.dtype}")
    if array.ndim not in (2, 3):
        raise ValueError(f"Image array must be 2D or 3D, got shape {array.shape}")

    rows = np.ascontiguousarray(array).reshape(array.shape[0], -1)
    return [compress(row) for row in rows]


def unpack_rows(rows: Sequence[bytes], shape: Tuple[int, ...]) -> np.ndarray:
    """Expand packed rows back into an array of `shape`.

    Raises:
        ValueError: If the row count or any decoded row size doesn't match
    """
    if len(rows) != shape[0]:
        raise ValueError(f"Expected {shape[0]} rows, got {len(rows)}")

    row_size = int(np.prod(shape[1:]))
    result = np.empty((shape[0], row_size), dtype=np.uint8)

    for index, packed in enumerate(rows):
        row = decompress(packed)
        if len(row) != row_size:
            raise ValueError(
                f"Row {index} decoded to {len(row)} bytes, expected {row_size}"
            )
        result[index] = np.frombuffer(row, dtype=np.uint8)

    return result.reshape(shape)


@dataclass
class PackedImage:
    """An image stored as independently packed scanlines."""
    mode: str
    size: Tuple[int, int]
    rows: List[bytes]

    @property
    def shape(self) -> Tuple[int, ...]:
        width, height = self.size
        bands = len(Image.new(self.mode, (1, 1)).getbands())
        if bands == 1:
            return (height, width)
        return (height, width, bands)

    @property
    def compressed_size(self) -> int:
        return sum(len(row) for row in self.rows)

    @property
    def raw_size(self) -> int:
        return int(np.prod(self.shape))


def pack_image(image_path: Path) -> PackedImage:
    """Load an image and pack its scanlines.

    Images outside L, RGB and RGBA are converted first: modes with alpha to
    RGBA, palette images to RGB, everything else to 8-bit grayscale.
    """
    img = Image.open(image_path)
    if img.mode not in ("L", "RGB", "RGBA"):
        if "A" in img.getbands() or "transparency" in img.info:
            img = img.convert("RGBA")
        elif img.mode == "P":
            img = img.convert("RGB")
        else:
            img = img.convert("L")

    return PackedImage(mode=img.mode, size=img.size, rows=pack_rows(np.asarray(img)))


def unpack_image(packed: PackedImage) -> Image.Image:
    """Rebuild a Pillow image from its packed scanlines."""
    array = unpack_rows(packed.rows, packed.shape)
    return Image.fromarray(array)
