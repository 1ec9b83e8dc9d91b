import pytest

from app.core.contracts import BBox4, EventFilter
from app.core.errors import DuplicateTrackingId, IllegalTransition, InvalidEnum, NotFound, ValidationError

GUJARAT = BBox4(minLng=68.0, minLat=20.0, maxLng=74.5, maxLat=24.8)
KERALA = BBox4(minLng=74.8, minLat=8.1, maxLng=77.5, maxLat=12.8)


class TestSubmitReport:
    def test_submit_then_query_is_pending_and_unread(self, alerts, report):
        ev = alerts.submit_report(report())
        items = alerts.query_events(EventFilter(), "dashboard-1")
        assert len(items) == 1
        assert items[0].event.id == ev.id
        assert items[0].event.status == "pending"
        assert items[0].is_read is False

    @pytest.mark.parametrize("severity", [0, 6, -3, 2.5, True, "5"])
    def test_invalid_severity_is_never_stored(self, alerts, report, severity):
        with pytest.raises(ValidationError):
            alerts.submit_report(report(severity=severity))
        assert len(alerts.store) == 0

    @pytest.mark.parametrize(
        "overrides",
        [
            {"location": {"lat": 91.0, "lng": 70.0, "name": "x"}},
            {"location": {"lat": 20.0, "lng": -181.0, "name": "x"}},
            {"hazard_type": "earthquake"},
            {"priority": "urgent"},
            {"confidence": 101},
            {"affected_people": -1},
            {"title": ""},
        ],
    )
    def test_validation_errors(self, alerts, report, overrides):
        with pytest.raises(ValidationError) as exc:
            alerts.submit_report(report(**overrides))
        assert str(exc.value)
        assert len(alerts.store) == 0

    def test_duplicate_tracking_id(self, alerts, report):
        alerts.submit_report(report(tracking_id="HR-009999"))
        with pytest.raises(DuplicateTrackingId):
            alerts.submit_report(report(tracking_id="HR-009999"))


class TestQueryScenarios:
    def test_three_events_newest_first(self, alerts, report):
        ids = [alerts.submit_report(report(title=f"t{i}")).id for i in range(1, 4)]
        got = [it.event.id for it in alerts.query_events(EventFilter(), "s")]
        assert got == list(reversed(ids))

    def test_severity_and_type_conjunction(self, alerts, report):
        alerts.submit_report(report(severity=2, hazard_type="tsunami"))
        alerts.submit_report(report(severity=4, hazard_type="flooding"))
        alerts.submit_report(report(severity=5, hazard_type="tsunami"))
        alerts.submit_report(report(severity=4, hazard_type="tsunami"))

        got = alerts.query_events(EventFilter(severities=[4, 5], hazard_types=["tsunami"]), "s")
        assert len(got) == 2
        for it in got:
            assert it.event.severity in (4, 5)
            assert it.event.hazard_type == "tsunami"

    def test_dwarka_in_gujarat_not_kerala(self, alerts, report):
        a = alerts.submit_report(report(severity=5, hazard_type="tsunami"))
        assert [it.event.id for it in alerts.query_events(EventFilter(bbox=GUJARAT), "map")] == [a.id]
        assert alerts.query_events(EventFilter(bbox=KERALA), "map") == []
        assert [it.event.id for it in alerts.query_events(EventFilter(region="gujarat"), "map")] == [a.id]
        assert alerts.query_events(EventFilter(region="kerala"), "map") == []

    def test_session_key_required(self, alerts):
        with pytest.raises(ValidationError):
            alerts.query_events(EventFilter(), "  ")

    def test_unread_only_is_per_session(self, alerts, report):
        a = alerts.submit_report(report(title="a"))
        b = alerts.submit_report(report(title="b"))
        alerts.mark_read("feed", a.id)

        feed = alerts.query_events(EventFilter(unread_only=True), "feed")
        assert [it.event.id for it in feed] == [b.id]
        review = alerts.query_events(EventFilter(unread_only=True), "review")
        assert {it.event.id for it in review} == {a.id, b.id}


class TestReadState:
    def test_mark_all_read_twice(self, alerts, report):
        for _ in range(3):
            alerts.submit_report(report())
        assert alerts.mark_all_read("s") == 0
        assert alerts.mark_all_read("s") == 0
        assert alerts.unread_count("s") == 0

    def test_mark_all_read_only_covers_existing_events(self, alerts, report):
        alerts.submit_report(report())
        alerts.mark_all_read("s")
        alerts.submit_report(report())
        assert alerts.unread_count("s") == 1

    def test_mark_read_unknown_event(self, alerts):
        with pytest.raises(NotFound):
            alerts.mark_read("s", "nope")

    def test_read_state_does_not_leak_between_sessions(self, alerts, report):
        ev = alerts.submit_report(report())
        assert alerts.mark_read("a", ev.id) == 0
        assert alerts.unread_count("b") == 1
        assert alerts.query_events(EventFilter(), "a")[0].is_read is True
        assert alerts.query_events(EventFilter(), "b")[0].is_read is False

    def test_reading_never_changes_the_event(self, alerts, report):
        ev = alerts.submit_report(report())
        alerts.mark_read("a", ev.id)
        assert alerts.get_event(ev.id) == ev


class TestReview:
    def test_verify_round_trip(self, alerts, report):
        ev = alerts.submit_report(report())
        alerts.review_event(ev.id, "verify", "Dr. A. Sharma", "Confirmed by Coast Guard")
        got = alerts.get_event(ev.id)
        assert got.status == "verified"
        assert got.reviewed_by == "Dr. A. Sharma"
        assert got.review_notes == "Confirmed by Coast Guard"
        assert got.reviewed_at is not None

        for action in ("verify", "reject", "mark-false-alarm", "start-review"):
            with pytest.raises(IllegalTransition):
                alerts.review_event(ev.id, action, "Dr. A. Sharma", None)

    def test_unknown_action(self, alerts, report):
        ev = alerts.submit_report(report())
        with pytest.raises(InvalidEnum):
            alerts.review_event(ev.id, "approve", "ops")
        assert alerts.get_event(ev.id).status == "pending"

    def test_missing_event(self, alerts):
        with pytest.raises(NotFound):
            alerts.review_event("nope", "verify", "ops")

    def test_terminal_without_reviewer(self, alerts, report):
        ev = alerts.submit_report(report())
        with pytest.raises(IllegalTransition):
            alerts.review_event(ev.id, "reject", "")
        assert alerts.get_event(ev.id).status == "pending"

    def test_review_is_shared_across_sessions(self, alerts, report):
        ev = alerts.submit_report(report())
        alerts.review_event(ev.id, "mark-false-alarm", "City Official", "Normal tide")
        for session in ("feed", "map", "review"):
            assert alerts.query_events(EventFilter(), session)[0].event.status == "false-alarm"


class TestFeed:
    def test_start_stop_idempotent(self, alerts):
        assert alerts.start_feed(interval_ms=10_000, probability=0.0).running
        assert alerts.start_feed().running
        assert alerts.stop_feed().running is False
        assert alerts.stop_feed().running is False

    def test_bad_probability(self, alerts):
        with pytest.raises(ValidationError):
            alerts.start_feed(probability=2.0)
        assert not alerts.feed_status().running

    def test_feed_status_reports_interval(self, alerts):
        status = alerts.start_feed(interval_ms=250, probability=0.0)
        assert status.interval_s == pytest.approx(0.25)
        alerts.stop_feed()


class TestSummaryAndExport:
    def test_summary_with_session(self, alerts, report):
        a = alerts.submit_report(report(severity=5, affected_people=10))
        alerts.submit_report(report(severity=3, affected_people=5))
        alerts.submit_report(report(severity=1, affected_people=None))
        alerts.mark_read("s", a.id)

        s = alerts.summary(EventFilter(), "s")
        assert s.total == 3
        assert s.affected_people == 15
        assert s.by_severity_band == {"high": 1, "moderate": 1, "low": 1}
        assert s.unread == 2

    def test_summary_ignores_paging(self, alerts, report):
        for _ in range(4):
            alerts.submit_report(report())
        assert alerts.summary(EventFilter(limit=1)).total == 4

    def test_csv_export(self, alerts, report):
        alerts.submit_report(report(title="Dune collapse, Colva"))
        alerts.submit_report(report())
        body, media_type = alerts.export(EventFilter(), "csv")
        assert media_type.startswith("text/csv")
        lines = body.decode("utf-8").strip().splitlines()
        assert len(lines) == 3
        assert lines[0].startswith("tracking_id,id,hazard_type")
        assert '"Dune collapse, Colva"' in body.decode("utf-8")

    def test_json_export(self, alerts, report):
        import orjson

        ev = alerts.submit_report(report())
        body, media_type = alerts.export(EventFilter(), "json")
        assert media_type == "application/json"
        rows = orjson.loads(body)
        assert rows[0]["tracking_id"] == ev.tracking_id
        assert rows[0]["location"]["name"] == "Dwarka Beach, Gujarat"

    def test_unknown_export_format(self, alerts):
        with pytest.raises(ValidationError):
            alerts.export(EventFilter(), "xml")


class TestSeed:
    def test_demo_reports_reach_sample_statuses(self, alerts):
        loaded = alerts.seed_demo_data()
        by_tid = {e.tracking_id: e for e in loaded}
        assert set(by_tid) == {"HR-001234", "HR-001235", "HR-001236", "HR-001237", "HR-001238"}
        assert by_tid["HR-001234"].status == "under-review"
        assert by_tid["HR-001235"].status == "verified"
        assert by_tid["HR-001235"].reviewed_by == "Dr. A. Sharma"
        assert by_tid["HR-001236"].status == "pending"
        assert by_tid["HR-001237"].status == "false-alarm"
        assert all(e.source == "seed" for e in loaded)

    def test_seeding_twice_skips_existing(self, alerts):
        alerts.seed_demo_data()
        assert alerts.seed_demo_data() == []
        assert len(alerts.store) == 5
