"""Pure navigation logic for the lightbox overlay."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Sequence, Union

from galleria.widgets.errors import (IndexOutOfRange, InvalidArgument,
                                     PreconditionViolation)


class ThumbnailPlacement(str, Enum):
    HIDDEN = 'hidden'
    ABOVE = 'above'
    BELOW = 'below'

    @classmethod
    def parse(cls, value) -> 'ThumbnailPlacement':
        """Accept enum members, their values, and the top/bottom aliases."""
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        aliases = {'top': cls.ABOVE, 'bottom': cls.BELOW}
        if text in aliases:
            return aliases[text]
        try:
            return cls(text)
        except ValueError:
            raise InvalidArgument(
                f'Unknown thumbnail placement: {value!r}') from None


@dataclass(frozen=True)
class NavigatorState:
    """Which image the overlay shows; `current_index is None` when closed."""

    total_count: int
    current_index: int | None = None
    thumbnail_enabled: bool = False

    def __post_init__(self):
        if self.total_count < 0:
            raise PreconditionViolation(
                f'total_count must be >= 0, got {self.total_count}')
        if (self.current_index is not None
                and not 0 <= self.current_index < self.total_count):
            raise IndexOutOfRange(
                f'index {self.current_index} outside [0, {self.total_count})')

    @property
    def is_open(self) -> bool:
        return self.current_index is not None

    @property
    def has_next(self) -> bool:
        return self.is_open and self.current_index < self.total_count - 1

    @property
    def has_previous(self) -> bool:
        return self.is_open and self.current_index > 0


# Actions

@dataclass(frozen=True)
class Open:
    index: int


@dataclass(frozen=True)
class Close:
    pass


@dataclass(frozen=True)
class Next:
    pass


@dataclass(frozen=True)
class Previous:
    pass


Action = Union[Open, Close, Next, Previous]


# Effects the rendering layer executes

@dataclass(frozen=True)
class ShowOverlay:
    index: int


@dataclass(frozen=True)
class HideOverlay:
    pass


@dataclass(frozen=True)
class HighlightThumbnail:
    index: int


@dataclass(frozen=True)
class ScrollThumbnailIntoView:
    """Must run after the new state has been painted."""

    index: int
    after_render: bool = True


Effect = Union[ShowOverlay, HideOverlay, HighlightThumbnail,
               ScrollThumbnailIntoView]


def _open_effects(state: NavigatorState, index: int) -> tuple[Effect, ...]:
    effects: list[Effect] = [ShowOverlay(index)]
    if state.thumbnail_enabled:
        effects.append(HighlightThumbnail(index))
        effects.append(ScrollThumbnailIntoView(index))
    return tuple(effects)


def transition(state: NavigatorState,
               action: Action) -> tuple[NavigatorState, tuple[Effect, ...]]:
    """
    Apply `action` to `state` without side effects.

    Returns the new state and the effects the renderer should run, in order.
    Boundary moves (next at the last image, previous at the first, close while
    closed) return the same state and no effects.

    Raises:
        IndexOutOfRange: If `Open.index` does not address an image.
    """
    if isinstance(action, Open):
        index = action.index
        if not 0 <= index < state.total_count:
            raise IndexOutOfRange(
                f'cannot open index {index} of {state.total_count} images')
        new_state = replace(state, current_index=index)
        return new_state, _open_effects(new_state, index)

    if isinstance(action, Close):
        if not state.is_open:
            return state, ()
        return replace(state, current_index=None), (HideOverlay(),)

    if isinstance(action, Next):
        if not state.has_next:
            return state, ()
        return transition(state, Open(state.current_index + 1))

    if isinstance(action, Previous):
        if not state.has_previous:
            return state, ()
        return transition(state, Open(state.current_index - 1))

    raise TypeError(f'Unknown lightbox action: {action!r}')


def action_for_swipe(velocity: float) -> Action | None:
    """Map a horizontal drag's end velocity to a navigation action."""
    if velocity > 0:
        return Previous()
    if velocity < 0:
        return Next()
    return None


def action_for_tap(thumbnail_index: int | None = None) -> Action:
    """A tap on a thumbnail opens it; a tap anywhere else closes."""
    if thumbnail_index is None:
        return Close()
    return Open(thumbnail_index)


class LightboxNavigator:
    """Owns the navigation state of one lightbox view."""

    def __init__(self, image_urls: Sequence[str],
                 thumbnail_urls: Sequence[str] | None = None,
                 thumbnail_placement=ThumbnailPlacement.HIDDEN,
                 *, strict: bool = True):
        self.image_urls = list(image_urls)
        self.thumbnail_urls = list(thumbnail_urls or [])
        self.thumbnail_placement = ThumbnailPlacement.parse(thumbnail_placement)
        # Release builds clamp out-of-range opens instead of raising.
        self.strict = strict
        thumbnail_enabled = self.thumbnail_placement != ThumbnailPlacement.HIDDEN
        if thumbnail_enabled:
            if not self.thumbnail_urls:
                raise PreconditionViolation(
                    'thumbnail placement requires a non-empty thumbnail list')
            if len(self.thumbnail_urls) != len(self.image_urls):
                raise PreconditionViolation(
                    f'{len(self.thumbnail_urls)} thumbnails for '
                    f'{len(self.image_urls)} images')
        self._state = NavigatorState(len(self.image_urls),
                                     thumbnail_enabled=thumbnail_enabled)

    @property
    def state(self) -> NavigatorState:
        return self._state

    @property
    def image_count(self) -> int:
        return self._state.total_count

    @property
    def current_index(self) -> int | None:
        return self._state.current_index

    @property
    def current_image(self) -> str | None:
        if self._state.current_index is None:
            return None
        return self.image_urls[self._state.current_index]

    @property
    def current_thumbnail(self) -> str | None:
        if self._state.current_index is None or not self._state.thumbnail_enabled:
            return None
        return self.thumbnail_urls[self._state.current_index]

    def dispatch(self, action: Action) -> tuple[Effect, ...]:
        self._state, effects = transition(self._state, action)
        return effects

    def open(self, index: int) -> tuple[Effect, ...]:
        if not self.strict:
            if self.image_count == 0:
                print(f"[LIGHTBOX] Ignoring open({index}) on empty collection")
                return ()
            clamped = max(0, min(index, self.image_count - 1))
            if clamped != index:
                print(f"[LIGHTBOX] Clamped open({index}) to {clamped}")
            index = clamped
        return self.dispatch(Open(index))

    def close(self) -> tuple[Effect, ...]:
        return self.dispatch(Close())

    def next(self) -> tuple[Effect, ...]:
        return self.dispatch(Next())

    def previous(self) -> tuple[Effect, ...]:
        return self.dispatch(Previous())
