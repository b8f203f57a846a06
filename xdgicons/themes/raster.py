"""Decoding and scaling of raster icon files."""

from __future__ import annotations

from typing import Protocol

from PySide6.QtCore import QByteArray, Qt
from PySide6.QtGui import QImage

from xdgicons.errors import ErrorCode, RasterError


class Rasterizer(Protocol):
    """Turns icon file bytes into bitmaps. Failures raise RasterError."""

    def decode(self, data: bytes) -> QImage: ...

    def scale(self, image: QImage, size: int) -> QImage: ...


class QtRasterizer:
    """Rasterizer backed by QImage."""

    def decode(self, data: bytes) -> QImage:
        image = QImage.fromData(QByteArray(data))
        if image.isNull():
            raise RasterError(
                code=ErrorCode.ICON_DECODE_FAILED,
                details={"bytes": len(data)},
            )
        return image

    def scale(self, image: QImage, size: int) -> QImage:
        if size <= 0:
            raise RasterError(code=ErrorCode.ICON_SCALE_FAILED, details={"size": size})
        scaled = image.scaled(
            size,
            size,
            Qt.AspectRatioMode.KeepAspectRatio,
            Qt.TransformationMode.SmoothTransformation,
        )
        if scaled.isNull():
            raise RasterError(code=ErrorCode.ICON_SCALE_FAILED, details={"size": size})
        return scaled
