from galleria.widgets.lightbox_navigator import (HideOverlay, HighlightThumbnail,
                                                 ScrollThumbnailIntoView,
                                                 ShowOverlay)


class LightboxEffectService:
    """Runs navigator effects against a lightbox view.

    Immediate effects are applied in order. Effects flagged `after_render`
    are queued and flushed from a callback the view schedules after its next
    repaint, so thumbnail geometry is measured once the new state is visible.
    """

    def __init__(self, view):
        self._view = view
        self._pending: list[ScrollThumbnailIntoView] = []
        self._flush_scheduled = False

    @property
    def pending(self) -> list:
        return list(self._pending)

    def apply(self, effects):
        for effect in effects:
            if getattr(effect, 'after_render', False):
                self._pending.append(effect)
                continue
            if isinstance(effect, ShowOverlay):
                self._view._show_overlay(effect.index)
            elif isinstance(effect, HideOverlay):
                # Scrolling a strip that is no longer shown is pointless.
                self._pending.clear()
                self._view._hide_overlay()
            elif isinstance(effect, HighlightThumbnail):
                self._view._highlight_thumbnail(effect.index)
            else:
                print(f"[LIGHTBOX] Unhandled effect: {effect!r}")

        if self._pending and not self._flush_scheduled:
            self._flush_scheduled = True
            self._view._schedule_after_render(self.flush)

    def flush(self):
        """Run queued post-render effects; only the latest scroll matters."""
        self._flush_scheduled = False
        if not self._pending:
            return
        latest = self._pending[-1]
        self._pending.clear()
        if not self._view.navigator.state.is_open:
            return
        if isinstance(latest, ScrollThumbnailIntoView):
            self._view._scroll_thumbnail_into_view(latest.index)
