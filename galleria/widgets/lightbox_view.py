import time
from dataclasses import replace

from PySide6.QtCore import QEvent, QObject, Qt, QTimer, Signal
from PySide6.QtGui import QColor, QKeyEvent, QMouseEvent, QPainter, QPixmap
from PySide6.QtWidgets import (QApplication, QHBoxLayout, QLabel, QScrollArea,
                               QSizePolicy, QVBoxLayout, QWidget)

from galleria.utils.options import LightboxOptions
from galleria.utils.settings import (get_lightbox_options, is_lightbox_setting,
                                     settings)
from galleria.widgets.lightbox_effect_service import LightboxEffectService
from galleria.widgets.lightbox_navigator import (LightboxNavigator,
                                                 ScrollThumbnailIntoView,
                                                 ThumbnailPlacement,
                                                 action_for_swipe,
                                                 action_for_tap)

THUMBNAIL_SPACING = 8
IMAGE_MARGIN = 12


def load_pixmap(path: str) -> QPixmap:
    pixmap = QPixmap(path)
    if pixmap.isNull():
        print(f"[LIGHTBOX] Failed to load image: {path}")
    return pixmap


class ThumbnailLabel(QLabel):
    """One square thumbnail; draws a border while it is the active image."""

    clicked = Signal(int)

    def __init__(self, index: int, path: str, options: LightboxOptions,
                 parent=None):
        super().__init__(parent)
        self.index = index
        self._options = options
        self._active = False
        self.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.setCursor(Qt.CursorShape.PointingHandCursor)
        size = int(options.thumbnail_size)
        self.setFixedSize(size, size)
        pixmap = load_pixmap(path)
        if not pixmap.isNull():
            inner = max(1, size - 2 * int(options.thumbnail_border_width))
            self.setPixmap(pixmap.scaled(
                inner, inner, Qt.AspectRatioMode.KeepAspectRatio,
                Qt.TransformationMode.SmoothTransformation))
        self._update_border()

    def set_active(self, active: bool):
        if active != self._active:
            self._active = active
            self._update_border()

    def is_active(self) -> bool:
        return self._active

    def set_options(self, options: LightboxOptions):
        self._options = options
        self._update_border()

    def _update_border(self):
        color = (self._options.thumbnail_border_color if self._active
                 else 'transparent')
        self.setStyleSheet(
            f'border: {self._options.thumbnail_border_width:g}px solid {color};')

    def mouseReleaseEvent(self, event: QMouseEvent):
        if event.button() == Qt.MouseButton.LeftButton:
            self.clicked.emit(self.index)
            event.accept()
            return
        super().mouseReleaseEvent(event)

    def mousePressEvent(self, event: QMouseEvent):
        # Keep the press from reaching the overlay, which would treat the
        # matching release as a tap outside the strip.
        event.accept()


class ScaledImageLabel(QLabel):
    """Shows a pixmap scaled to fit while keeping its aspect ratio."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self._pixmap = QPixmap()
        self.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.setSizePolicy(QSizePolicy.Policy.Ignored,
                           QSizePolicy.Policy.Ignored)
        # Let clicks and drags fall through to the overlay.
        self.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents)

    def set_image(self, pixmap: QPixmap):
        self._pixmap = pixmap
        self._rescale()

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self._rescale()

    def _rescale(self):
        if self._pixmap.isNull() or self.width() <= 0 or self.height() <= 0:
            self.clear()
            return
        self.setPixmap(self._pixmap.scaled(
            self.size(), Qt.AspectRatioMode.KeepAspectRatio,
            Qt.TransformationMode.SmoothTransformation))


class LightboxView(QWidget):
    """Full-window overlay showing one image of a collection.

    The view is hidden until `show_image` is called. It covers its parent
    widget, paints the overlay color behind the image and optionally shows a
    strip of thumbnails above or below it. Swiping right shows the previous
    image, swiping left the next one, a click outside the thumbnails closes
    the overlay.
    """

    current_index_changed = Signal(int, name='currentIndexChanged')

    def __init__(self, image_urls: list[str],
                 thumbnail_urls: list[str] | None = None,
                 options: LightboxOptions | None = None,
                 parent: QWidget | None = None, *, strict: bool = True):
        super().__init__(parent)
        self.options = (options or get_lightbox_options()).validate()
        self.navigator = LightboxNavigator(
            image_urls, thumbnail_urls, self.options.thumbnail_placement,
            strict=strict)
        self.effect_service = LightboxEffectService(self)
        self._press_pos = None
        self._press_time = 0.0
        self._pixmap_cache: dict[int, QPixmap] = {}

        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, False)

        self.image_label = ScaledImageLabel(self)
        self.thumbnail_scroll_area = None
        self.thumbnails: list[ThumbnailLabel] = []

        layout = self._layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)
        image_container = QWidget(self)
        image_container.setAttribute(
            Qt.WidgetAttribute.WA_TransparentForMouseEvents)
        image_layout = QVBoxLayout(image_container)
        image_layout.setContentsMargins(IMAGE_MARGIN, IMAGE_MARGIN,
                                        IMAGE_MARGIN, IMAGE_MARGIN)
        image_layout.addWidget(self.image_label)
        layout.addWidget(image_container, 1)

        self._install_thumbnail_strip()

        if parent is not None:
            parent.installEventFilter(self)
            self.setGeometry(parent.rect())
        self.hide()
        settings.change.connect(self.setting_change)

    def _install_thumbnail_strip(self):
        placement = self.navigator.thumbnail_placement
        if placement == ThumbnailPlacement.HIDDEN:
            return
        self.thumbnail_scroll_area = self._build_thumbnail_strip()
        if placement == ThumbnailPlacement.ABOVE:
            self._layout.insertWidget(0, self.thumbnail_scroll_area)
        else:
            self._layout.addWidget(self.thumbnail_scroll_area)

    def _rebuild_thumbnail_strip(self):
        """Recreate the strip after a thumbnail size or border width change."""
        if self.thumbnail_scroll_area is None:
            return
        self._layout.removeWidget(self.thumbnail_scroll_area)
        self.thumbnail_scroll_area.deleteLater()
        self.thumbnail_scroll_area = None
        self.thumbnails = []
        self._install_thumbnail_strip()
        index = self.navigator.current_index
        if index is not None:
            self._highlight_thumbnail(index)
            self.effect_service.apply([ScrollThumbnailIntoView(index)])

    def _build_thumbnail_strip(self) -> QScrollArea:
        strip = QWidget()
        strip.setStyleSheet('background: transparent;')
        strip_layout = QHBoxLayout(strip)
        strip_layout.setContentsMargins(THUMBNAIL_SPACING, THUMBNAIL_SPACING,
                                        THUMBNAIL_SPACING, THUMBNAIL_SPACING)
        strip_layout.setSpacing(2 * THUMBNAIL_SPACING)
        for index, path in enumerate(self.navigator.thumbnail_urls):
            thumbnail = ThumbnailLabel(index, path, self.options, strip)
            thumbnail.clicked.connect(self._on_thumbnail_clicked)
            strip_layout.addWidget(thumbnail)
            self.thumbnails.append(thumbnail)
        strip_layout.addStretch(1)

        scroll_area = QScrollArea(self)
        scroll_area.setWidget(strip)
        scroll_area.setWidgetResizable(True)
        scroll_area.setFrameShape(QScrollArea.Shape.NoFrame)
        scroll_area.setStyleSheet('background: transparent;')
        scroll_area.setVerticalScrollBarPolicy(
            Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        scroll_area.setFixedHeight(
            int(self.options.thumbnail_size) + 2 * THUMBNAIL_SPACING
            + scroll_area.horizontalScrollBar().sizeHint().height())
        return scroll_area

    # Public navigation API

    def show_image(self, index: int):
        """Open the overlay at `index`, replacing whatever it shows."""
        self._dispatch(self.navigator.open(index))

    def close_overlay(self):
        self._dispatch(self.navigator.close())

    def show_next(self):
        self._dispatch(self.navigator.next())

    def show_previous(self):
        self._dispatch(self.navigator.previous())

    def current_index(self) -> int | None:
        return self.navigator.current_index

    def _dispatch(self, effects):
        if not effects:
            return
        self.effect_service.apply(effects)
        index = self.navigator.current_index
        self.current_index_changed.emit(-1 if index is None else index)

    def _on_thumbnail_clicked(self, index: int):
        self._dispatch(self.navigator.dispatch(action_for_tap(index)))

    # Effect targets, called by LightboxEffectService

    def _show_overlay(self, index: int):
        if index not in self._pixmap_cache:
            self._pixmap_cache[index] = load_pixmap(
                self.navigator.image_urls[index])
        self.image_label.set_image(self._pixmap_cache[index])
        if self.parentWidget() is not None:
            self.setGeometry(self.parentWidget().rect())
        self.show()
        self.raise_()
        self.setFocus()

    def _hide_overlay(self):
        self.hide()

    def _highlight_thumbnail(self, index: int):
        for thumbnail in self.thumbnails:
            thumbnail.set_active(thumbnail.index == index)

    def _scroll_thumbnail_into_view(self, index: int):
        if self.thumbnail_scroll_area is None or not 0 <= index < len(self.thumbnails):
            return
        self.thumbnail_scroll_area.ensureWidgetVisible(
            self.thumbnails[index], THUMBNAIL_SPACING, 0)

    def _schedule_after_render(self, callback):
        # A zero timeout runs after pending paint events have been processed.
        # Bound to self so the callback is dropped if the view is destroyed.
        QTimer.singleShot(0, self, callback)

    # Qt events

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.fillRect(self.rect(), QColor(self.options.overlay_background_color))
        painter.end()

    def eventFilter(self, watched: QObject, event: QEvent) -> bool:
        if watched is self.parentWidget() and event.type() == QEvent.Type.Resize:
            self.setGeometry(self.parentWidget().rect())
        return super().eventFilter(watched, event)

    def mousePressEvent(self, event: QMouseEvent):
        if event.button() == Qt.MouseButton.LeftButton:
            self._press_pos = event.position()
            self._press_time = time.monotonic()
            event.accept()
            return
        super().mousePressEvent(event)

    def mouseReleaseEvent(self, event: QMouseEvent):
        if event.button() != Qt.MouseButton.LeftButton or self._press_pos is None:
            super().mouseReleaseEvent(event)
            return
        delta_x = event.position().x() - self._press_pos.x()
        elapsed = max(time.monotonic() - self._press_time, 1e-3)
        self._press_pos = None
        if abs(delta_x) >= QApplication.startDragDistance():
            action = action_for_swipe(delta_x / elapsed)
        else:
            action = action_for_tap()
        if action is not None:
            self._dispatch(self.navigator.dispatch(action))
        event.accept()

    def keyPressEvent(self, event: QKeyEvent):
        key = event.key()
        if key == Qt.Key.Key_Left:
            self.show_previous()
        elif key == Qt.Key.Key_Right:
            self.show_next()
        elif key == Qt.Key.Key_Escape:
            self.close_overlay()
        else:
            super().keyPressEvent(event)
            return
        event.accept()

    def apply_options(self, options: LightboxOptions):
        """Restyle the view; placement is fixed for the view's lifetime."""
        previous = self.options
        options = replace(options.validate(),
                          thumbnail_placement=previous.thumbnail_placement)
        self.options = options
        if (options.thumbnail_size != previous.thumbnail_size
                or options.thumbnail_border_width != previous.thumbnail_border_width):
            self._rebuild_thumbnail_strip()
        else:
            for thumbnail in self.thumbnails:
                thumbnail.set_options(options)
        self.update()

    def setting_change(self, key, value):
        # Placement changes alter the widget tree; those need a new view.
        if not is_lightbox_setting(key) or key == 'lightbox_thumbnail_placement':
            return
        self.apply_options(get_lightbox_options())
