"""Unit tests for conversion progress reporting."""

import pytest

from wiki2latex.progress import StatusEvent, StatusReporter


@pytest.mark.unit
class TestStatusReporter:
    """Test stage and step percentages."""

    def test_stages_split_the_range(self):
        events = []
        status = StatusReporter(4, events.append)
        for _ in range(4):
            status.create_stage(0, "stage")
        assert [e.percent for e in events] == [0.0, 25.0, 50.0, 75.0]

    def test_steps_advance_within_a_stage(self):
        events = []
        status = StatusReporter(2, events.append)
        status.create_stage(2, "Processing media files")
        status.report(file="a.png")
        status.report(file="b.png")
        status.create_stage(0, "Done")
        assert [round(e.percent) for e in events] == [0, 0, 25, 50]
        assert [e.file for e in events] == [None, "a.png", "b.png", None]
        assert events[2].message == "Processing media files"

    def test_report_n(self):
        events = []
        status = StatusReporter(1, events.append)
        status.create_stage(10, "work")
        status.report_n(5)
        status.report()
        assert events[-1].percent == pytest.approx(50.0)

    def test_new_message_replaces_file(self):
        events = []
        status = StatusReporter(1, events.append)
        status.create_stage(2, "first", "x")
        status.report("second")
        assert events[-1].message == "second"
        assert events[-1].file is None

    def test_without_callback(self):
        status = StatusReporter(3)
        status.create_stage(1, "quiet")
        status.report()
        assert status.percent_complete == pytest.approx(100 / 3)

    def test_zero_stages(self):
        status = StatusReporter(0)
        status.create_stage(0, "only")
        assert status.percent_complete == 0.0


@pytest.mark.unit
class TestStatusEvent:
    """Test event formatting."""

    def test_str_with_file(self):
        assert str(StatusEvent("Processing", "a.png", 12.4)) == "[12%] Processing: a.png"

    def test_str_without_file(self):
        assert str(StatusEvent("Done", percent=100)) == "[100%] Done"
