"""
Tests for target index reconciliation.
"""

from helpers import make_track, make_tracks

from tracksplice.domain.dnd.target_index import (
    adjust_insert_index_for_removal,
    calculate_effective_target_index,
    compute_adjusted_target_index,
    compute_insert_index,
)
from tracksplice.domain.playlists.mutator import splice_move


class TestComputeAdjustedTargetIndex:
    """Test post-removal target adjustment."""

    def test_moving_forward_subtracts_all(self, hoffnung_tracks) -> None:
        """Every dragged track before the target shifts it."""
        drag = hoffnung_tracks[4:7]
        assert compute_adjusted_target_index(9, drag, hoffnung_tracks, "pl", "pl") == 6

    def test_moving_backward_is_unchanged(self, hoffnung_tracks) -> None:
        """No dragged track before the target, no shift."""
        drag = hoffnung_tracks[4:7]
        assert compute_adjusted_target_index(1, drag, hoffnung_tracks, "pl", "pl") == 1

    def test_target_inside_selection(self, hoffnung_tracks) -> None:
        """Only the dragged tracks strictly before the target count."""
        drag = hoffnung_tracks[4:7]
        assert compute_adjusted_target_index(5, drag, hoffnung_tracks, "pl", "pl") == 4

    def test_other_list_is_unchanged(self, hoffnung_tracks) -> None:
        """Cross-list drops are not adjusted."""
        drag = hoffnung_tracks[4:7]
        assert compute_adjusted_target_index(9, drag, hoffnung_tracks, "pl", "other") == 9

    def test_duplicates_count_by_position(self) -> None:
        """Two copies of one track both count."""
        tracks = [make_track("x", 0), make_track("y", 1), make_track("x", 2), make_track("z", 3)]
        drag = [tracks[0], tracks[2]]

        assert compute_adjusted_target_index(4, drag, tracks, "pl", "pl") == 2

    def test_positionless_tracks_looked_up(self) -> None:
        """Tracks without positions are found in the ordered list."""
        tracks = make_tracks(["A", "B", "C", "D"])
        drag = [make_track("A"), make_track("B")]

        assert compute_adjusted_target_index(3, drag, tracks, "pl", "pl") == 1

    def test_adjusted_index_must_not_feed_the_splice(self, hoffnung_tracks) -> None:
        """Passing the adjusted index to the splice lands the run too early."""
        adjusted = compute_adjusted_target_index(
            9, hoffnung_tracks[4:7], hoffnung_tracks, "pl", "pl"
        )

        raw_result = splice_move(hoffnung_tracks, 4, 9, 3)
        double_adjusted = splice_move(hoffnung_tracks, 4, adjusted, 3)

        assert [t.name for t in raw_result[6:9]] == ["Lack again", "Not Feeling Up", "Hoffnung"]
        assert [t.name for t in double_adjusted[3:6]] == ["Lack again", "Not Feeling Up", "Hoffnung"]


class TestCalculateEffectiveTargetIndex:
    """Test the adjust-or-not switch."""

    def test_adjusts_when_asked(self) -> None:
        """The adjustment callable is used when should_adjust is true."""
        assert calculate_effective_target_index(9, True, lambda: 6) == 6

    def test_keeps_raw_index_otherwise(self) -> None:
        """The raw index is used and the callable is not invoked."""

        def explode() -> int:
            raise AssertionError("should not be called")

        assert calculate_effective_target_index(9, False, explode) == 9


class TestComputeInsertIndex:
    """Test filtered-to-full index mapping."""

    def test_maps_by_position(self) -> None:
        """A filtered index maps to the track's full-list index."""
        all_tracks = make_tracks(list("ABCDEF"))
        filtered = [all_tracks[1], all_tracks[4]]

        assert compute_insert_index(1, filtered, all_tracks) == 4

    def test_past_end_goes_after_last_filtered(self) -> None:
        """Past the view end, insert after the last filtered track."""
        all_tracks = make_tracks(list("ABCDEF"))
        filtered = [all_tracks[1], all_tracks[4]]

        assert compute_insert_index(2, filtered, all_tracks) == 5

    def test_empty_filter_appends(self) -> None:
        """With nothing visible, append."""
        assert compute_insert_index(0, [], make_tracks(list("ABC"))) == 3


class TestAdjustInsertIndexForRemoval:
    """Test source-index compensation."""

    def test_counts_sources_before_target(self) -> None:
        """Sources before the target shift it left, duplicates once."""
        assert adjust_insert_index_for_removal([1, 2, 2, 7], 5) == 3
