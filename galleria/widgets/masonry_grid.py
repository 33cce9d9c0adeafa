"""Masonry grid widget: items striped across a fixed number of columns or rows."""

from dataclasses import replace

from PySide6.QtCore import QMargins, Qt
from PySide6.QtWidgets import (QBoxLayout, QHBoxLayout, QScrollArea,
                               QVBoxLayout, QWidget)

from galleria.utils.options import MasonryOptions, parse_orientation
from galleria.utils.settings import (get_masonry_options, is_masonry_setting,
                                     settings)
from galleria.widgets.masonry_distribution import (MasonryOrientation,
                                                   distribute,
                                                   distribute_clamped)

# (main axis, cross axis) alignment flags per orientation of a box layout.
_VERTICAL_ALIGNMENT = {
    'start': Qt.AlignmentFlag.AlignTop,
    'center': Qt.AlignmentFlag.AlignVCenter,
    'end': Qt.AlignmentFlag.AlignBottom,
}
_HORIZONTAL_ALIGNMENT = {
    'start': Qt.AlignmentFlag.AlignLeft,
    'center': Qt.AlignmentFlag.AlignHCenter,
    'end': Qt.AlignmentFlag.AlignRight,
}


def _column_alignment(main: str, cross: str) -> Qt.AlignmentFlag:
    return _VERTICAL_ALIGNMENT[main] | _HORIZONTAL_ALIGNMENT[cross]


def _row_alignment(main: str, cross: str) -> Qt.AlignmentFlag:
    return _HORIZONTAL_ALIGNMENT[main] | _VERTICAL_ALIGNMENT[cross]


class MasonryGrid(QScrollArea):
    """
    Arranges widgets in a masonry grid.

    Items are distributed round robin into `bucket_count` buckets. In columns
    mode the buckets are vertical columns placed side by side and the grid
    scrolls vertically; in rows mode they are horizontal rows stacked on top
    of each other and the grid scrolls horizontally.
    """

    def __init__(self, items: list[QWidget] | None = None,
                 options: MasonryOptions | None = None,
                 parent: QWidget | None = None, *, strict: bool = True):
        super().__init__(parent)
        # Release builds treat a bad bucket count as one bucket instead of raising.
        self.strict = strict
        options = options or get_masonry_options()
        self.options = replace(
            options, bucket_count=self._checked_bucket_count(options.bucket_count)
        ).validate()
        self._items: list[QWidget] = list(items or [])
        self.buckets: list[list[QWidget]] = []
        self.setWidgetResizable(True)
        self.setFrameShape(QScrollArea.Shape.NoFrame)
        self._rebuild()
        settings.change.connect(self.setting_change)

    def items(self) -> list[QWidget]:
        return list(self._items)

    def set_items(self, items: list[QWidget]):
        self._items = list(items)
        self._rebuild()

    def set_bucket_count(self, bucket_count: int):
        self.options = replace(
            self.options, bucket_count=self._checked_bucket_count(bucket_count)
        ).validate()
        self._rebuild()

    def set_orientation(self, orientation):
        self.options = replace(self.options,
                               orientation=parse_orientation(orientation))
        self._rebuild()

    def _checked_bucket_count(self, bucket_count):
        if self.strict:
            return bucket_count
        return len(distribute_clamped([], bucket_count))

    def _rebuild(self):
        options = self.options
        if self.strict:
            self.buckets = distribute(self._items, options.bucket_count)
        else:
            self.buckets = distribute_clamped(self._items, options.bucket_count)
        columns_mode = options.orientation == MasonryOrientation.COLUMNS

        container = QWidget()
        if columns_mode:
            outer = QHBoxLayout(container)
            outer.setAlignment(_row_alignment(options.row_main_axis_alignment,
                                              options.row_cross_axis_alignment))
            self.setVerticalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAsNeeded)
            self.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        else:
            outer = QVBoxLayout(container)
            outer.setAlignment(_column_alignment(
                options.column_main_axis_alignment,
                options.column_cross_axis_alignment))
            self.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAsNeeded)
            self.setVerticalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        outer.setContentsMargins(0, 0, 0, 0)
        outer.setSpacing(0)

        padding = QMargins(options.item_padding, options.item_padding,
                           options.item_padding, options.item_padding)
        for bucket in self.buckets:
            bucket_widget = QWidget(container)
            if columns_mode:
                inner = QBoxLayout(QBoxLayout.Direction.TopToBottom, bucket_widget)
                alignment = _column_alignment(options.column_main_axis_alignment,
                                              options.column_cross_axis_alignment)
            else:
                inner = QBoxLayout(QBoxLayout.Direction.LeftToRight, bucket_widget)
                alignment = _row_alignment(options.row_main_axis_alignment,
                                           options.row_cross_axis_alignment)
            inner.setContentsMargins(0, 0, 0, 0)
            inner.setSpacing(0)
            inner.setAlignment(alignment)
            for item in bucket:
                cell = QWidget(bucket_widget)
                cell_layout = QVBoxLayout(cell)
                cell_layout.setContentsMargins(padding)
                cell_layout.addWidget(item)
                inner.addWidget(cell)
            # Every bucket gets an equal share of the cross axis.
            outer.addWidget(bucket_widget, 1)

        # Re-parenting the items above detached them from the old container,
        # so it can be dropped without deleting them.
        old = self.takeWidget()
        self.setWidget(container)
        if old is not None:
            old.deleteLater()

    def setting_change(self, key, value):
        if not is_masonry_setting(key):
            return
        self.options = get_masonry_options()
        self._rebuild()
