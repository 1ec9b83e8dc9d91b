import pytest

from app.core import catalog
from app.core.errors import InvalidEnum


class TestTransitions:
    def test_pending_can_reach_every_other_state(self):
        assert catalog.legal_transitions("pending") == {"under-review", "verified", "false-alarm", "rejected"}

    def test_under_review_only_reaches_terminal_states(self):
        assert catalog.legal_transitions("under-review") == {"verified", "false-alarm", "rejected"}

    @pytest.mark.parametrize("status", ["verified", "false-alarm", "rejected"])
    def test_terminal_states_have_no_exits(self, status):
        assert catalog.legal_transitions(status) == frozenset()
        assert catalog.is_terminal(status)

    def test_unknown_status_is_rejected(self):
        with pytest.raises(InvalidEnum):
            catalog.legal_transitions("closed")

    def test_action_targets(self):
        assert catalog.target_status("verify") == "verified"
        assert catalog.target_status("reject") == "rejected"
        assert catalog.target_status("mark-false-alarm") == "false-alarm"
        assert catalog.target_status("start-review") == "under-review"
        with pytest.raises(InvalidEnum):
            catalog.target_status("approve")


class TestSeverity:
    def test_colors_run_green_to_red(self):
        assert [catalog.severity_color(s) for s in catalog.SEVERITIES] == ["green", "blue", "yellow", "orange", "red"]

    def test_labels(self):
        assert catalog.severity_label(1) == "minimal"
        assert catalog.severity_label(5) == "critical"

    def test_bands(self):
        assert catalog.severity_band(5) == "high"
        assert catalog.severity_band(4) == "high"
        assert catalog.severity_band(3) == "moderate"
        assert catalog.severity_band(1) == "low"

    @pytest.mark.parametrize("bad", [0, 6, -1, True])
    def test_out_of_range_is_never_defaulted(self, bad):
        with pytest.raises(InvalidEnum):
            catalog.severity_color(bad)


class TestLookups:
    def test_every_hazard_type_has_an_icon(self):
        for t in catalog.HAZARD_TYPES:
            assert catalog.hazard_icon(t)

    def test_unknown_hazard_type(self):
        with pytest.raises(InvalidEnum):
            catalog.hazard_icon("system")

    def test_priority_rank_is_ascending(self):
        ranks = [catalog.priority_rank(p) for p in ("low", "medium", "high", "critical")]
        assert ranks == sorted(ranks)
        with pytest.raises(InvalidEnum):
            catalog.priority_rank("urgent")

    def test_status_and_priority_colors(self):
        assert catalog.status_color("verified") == "default"
        assert catalog.priority_color("critical") == "red"
        with pytest.raises(InvalidEnum):
            catalog.status_color("archived")
