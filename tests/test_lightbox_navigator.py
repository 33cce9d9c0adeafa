import pytest

from galleria.widgets.errors import (IndexOutOfRange, InvalidArgument,
                                     PreconditionViolation)
from galleria.widgets.lightbox_navigator import (Close, HideOverlay,
                                                 HighlightThumbnail,
                                                 LightboxNavigator, Next,
                                                 NavigatorState, Open,
                                                 Previous,
                                                 ScrollThumbnailIntoView,
                                                 ShowOverlay,
                                                 ThumbnailPlacement,
                                                 action_for_swipe,
                                                 action_for_tap, transition)


def _images(count):
    return [f"images/{i}.jpg" for i in range(count)]


def _thumbs(count):
    return [f"thumbs/{i}.jpg" for i in range(count)]


def test_new_state_is_closed():
    state = NavigatorState(total_count=3)
    assert state.current_index is None
    assert state.is_open is False
    assert state.has_next is False
    assert state.has_previous is False


def test_state_rejects_invalid_fields():
    with pytest.raises(PreconditionViolation):
        NavigatorState(total_count=-1)
    with pytest.raises(IndexOutOfRange):
        NavigatorState(total_count=2, current_index=2)


def test_open_then_next_twice():
    state = NavigatorState(total_count=10)
    state, _ = transition(state, Open(5))
    state, _ = transition(state, Next())
    state, _ = transition(state, Next())
    assert state.current_index == 7


def test_next_at_last_index_is_noop():
    state, _ = transition(NavigatorState(total_count=4), Open(3))
    new_state, effects = transition(state, Next())
    assert new_state == state
    assert effects == ()


def test_previous_at_first_index_is_noop():
    state, _ = transition(NavigatorState(total_count=4), Open(0))
    new_state, effects = transition(state, Previous())
    assert new_state == state
    assert effects == ()


def test_close_when_closed_is_noop():
    state = NavigatorState(total_count=4)
    new_state, effects = transition(state, Close())
    assert new_state == state
    assert new_state.is_open is False
    assert effects == ()


def test_next_and_previous_when_closed_are_noops():
    state = NavigatorState(total_count=4)
    assert transition(state, Next()) == (state, ())
    assert transition(state, Previous()) == (state, ())


@pytest.mark.parametrize("index", [4, -1, 100])
def test_open_out_of_range_fails(index):
    with pytest.raises(IndexOutOfRange):
        transition(NavigatorState(total_count=4), Open(index))


def test_open_on_empty_collection_fails():
    with pytest.raises(IndexError):
        transition(NavigatorState(total_count=0), Open(0))


def test_open_replaces_open_state():
    state, _ = transition(NavigatorState(total_count=5), Open(1))
    state, effects = transition(state, Open(3))
    assert state.current_index == 3
    assert effects == (ShowOverlay(3),)


def test_close_hides_overlay():
    state, _ = transition(NavigatorState(total_count=5), Open(2))
    state, effects = transition(state, Close())
    assert state.is_open is False
    assert effects == (HideOverlay(),)


def test_open_with_thumbnails_schedules_scroll_after_render():
    state = NavigatorState(total_count=5, thumbnail_enabled=True)
    state, effects = transition(state, Open(2))
    assert effects == (ShowOverlay(2), HighlightThumbnail(2),
                       ScrollThumbnailIntoView(2))
    assert effects[-1].after_render is True


def test_next_with_thumbnails_re_emits_scroll():
    state = NavigatorState(total_count=5, current_index=2, thumbnail_enabled=True)
    state, effects = transition(state, Next())
    assert state.current_index == 3
    assert ScrollThumbnailIntoView(3) in effects


def test_transition_does_not_mutate_input():
    state = NavigatorState(total_count=5)
    transition(state, Open(1))
    assert state.current_index is None


def test_unknown_action_is_rejected():
    with pytest.raises(TypeError):
        transition(NavigatorState(total_count=1), "open")


def test_swipe_mapping():
    assert action_for_swipe(350.0) == Previous()
    assert action_for_swipe(-350.0) == Next()
    assert action_for_swipe(0.0) is None


def test_tap_mapping():
    assert action_for_tap() == Close()
    assert action_for_tap(4) == Open(4)


def test_placement_parse_accepts_aliases():
    assert ThumbnailPlacement.parse("top") is ThumbnailPlacement.ABOVE
    assert ThumbnailPlacement.parse("Bottom") is ThumbnailPlacement.BELOW
    assert ThumbnailPlacement.parse("hidden") is ThumbnailPlacement.HIDDEN
    assert ThumbnailPlacement.parse(ThumbnailPlacement.ABOVE) is ThumbnailPlacement.ABOVE
    with pytest.raises(InvalidArgument):
        ThumbnailPlacement.parse("left")


def test_navigator_walks_through_images():
    navigator = LightboxNavigator(_images(3))
    assert navigator.current_image is None

    navigator.open(0)
    assert navigator.current_image == "images/0.jpg"
    navigator.next()
    navigator.next()
    navigator.next()
    assert navigator.current_index == 2
    navigator.previous()
    assert navigator.current_image == "images/1.jpg"
    navigator.close()
    assert navigator.state.is_open is False
    assert navigator.current_image is None


def test_navigator_is_reusable_after_close():
    navigator = LightboxNavigator(_images(3))
    navigator.open(1)
    navigator.close()
    effects = navigator.open(2)
    assert effects == (ShowOverlay(2),)
    assert navigator.current_index == 2


def test_navigator_open_out_of_range_keeps_state():
    navigator = LightboxNavigator(_images(3))
    navigator.open(1)
    with pytest.raises(IndexOutOfRange):
        navigator.open(3)
    assert navigator.current_index == 1


def test_navigator_requires_thumbnails_when_shown():
    with pytest.raises(PreconditionViolation):
        LightboxNavigator(_images(3), None, ThumbnailPlacement.BELOW)
    with pytest.raises(PreconditionViolation):
        LightboxNavigator(_images(3), _thumbs(2), "above")


def test_navigator_ignores_thumbnails_when_hidden():
    navigator = LightboxNavigator(_images(3), _thumbs(1))
    assert navigator.state.thumbnail_enabled is False
    navigator.open(0)
    assert navigator.current_thumbnail is None


def test_navigator_with_thumbnails():
    navigator = LightboxNavigator(_images(3), _thumbs(3), "below")
    effects = navigator.open(1)
    assert navigator.state.thumbnail_enabled is True
    assert navigator.current_thumbnail == "thumbs/1.jpg"
    assert HighlightThumbnail(1) in effects


def test_lenient_navigator_clamps_open(capsys):
    navigator = LightboxNavigator(_images(3), strict=False)
    navigator.open(10)
    assert navigator.current_index == 2
    navigator.open(-4)
    assert navigator.current_index == 0
    assert "[LIGHTBOX] Clamped" in capsys.readouterr().out


def test_lenient_navigator_on_empty_collection_stays_closed():
    navigator = LightboxNavigator([], strict=False)
    assert navigator.open(0) == ()
    assert navigator.state.is_open is False
