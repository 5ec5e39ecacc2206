from __future__ import annotations

from typing import Any

import pytest

from hand_pose_gestures import (
    DetectionFailedError,
    ErrorPolicy,
    FrameLogEvent,
    FrameProcessor,
    FrameProcessorConfig,
    FrameResult,
    FrameStatus,
    GestureLabel,
    HandFrame,
    Joint,
    JointName,
    LogEventKind,
    Point,
    ProcessorCallbackError,
    ProcessorError,
)
from hand_pose_gestures.exceptions import ConfigurationError


def _make_frame(*, thumb_tip_y: float = 0.2, confidence: float = 0.9) -> HandFrame:
    locations = {name: Point(0.5, 0.45) for name in JointName}
    locations[JointName.WRIST] = Point(0.5, 0.5)
    locations[JointName.MIDDLE_MCP] = Point(0.5, 0.4)
    locations[JointName.MIDDLE_PIP] = Point(0.4, 0.4)
    locations[JointName.THUMB_TIP] = Point(0.4, thumb_tip_y)
    return HandFrame(
        joints=tuple(Joint(name, location, confidence) for name, location in locations.items())
    )


class FakeDetector:
    """Detector returning scripted outputs; exceptions in the script are raised."""

    def __init__(self, outputs: list[HandFrame | Exception | None]) -> None:
        self._outputs = outputs
        self.calls = 0

    def __call__(self, image: Any) -> HandFrame | None:
        output = self._outputs[image]
        self.calls += 1
        if isinstance(output, Exception):
            raise output
        return output


def _make_processor(
    outputs: list[HandFrame | Exception | None],
    config: FrameProcessorConfig | None = None,
) -> FrameProcessor:
    return FrameProcessor(config, detector=FakeDetector(outputs))


def test_process_frame_classifies_valid_hand() -> None:
    result = FrameProcessor().process_frame(_make_frame())

    assert result.status is FrameStatus.HAND
    assert result.label is GestureLabel.THUMBS_UP
    assert result.bend_angle == pytest.approx(90.0)
    assert result.overlay.label == "THUMBS UP"
    assert not result.overlay.is_empty


def test_process_frame_without_hand_clears_overlay() -> None:
    result = FrameProcessor().process_frame(None)

    assert result.status is FrameStatus.NO_HAND
    assert result.label is GestureLabel.NONE
    assert result.overlay.is_empty
    assert all(path.is_empty for path in result.overlay.fingers)


def test_process_frame_low_confidence_is_no_hand() -> None:
    result = FrameProcessor().process_frame(_make_frame(confidence=0.3))

    assert result.status is FrameStatus.NO_HAND
    assert result.overlay.is_empty


def test_view_size_scales_overlay_geometry() -> None:
    processor = FrameProcessor(FrameProcessorConfig(view_size=(200.0, 200.0)))

    result = processor.process_frame(_make_frame(thumb_tip_y=0.8))

    assert result.label is GestureLabel.THUMBS_DOWN
    assert result.frame is not None
    assert result.frame.get_point(JointName.WRIST) == Point(100.0, 100.0)
    assert result.overlay.fingers[0].segments[-1].end == Point(100.0, 100.0)


def test_iter_results_per_frame_statuses() -> None:
    processor = _make_processor(
        [_make_frame(), None, RuntimeError("vision failed"), _make_frame(thumb_tip_y=0.8)]
    )

    results = list(processor.iter_results(range(4)))

    assert [result.status for result in results] == [
        FrameStatus.HAND,
        FrameStatus.NO_HAND,
        FrameStatus.DETECTION_FAILED,
        FrameStatus.HAND,
    ]
    assert [result.label for result in results] == [
        GestureLabel.THUMBS_UP,
        GestureLabel.NONE,
        GestureLabel.NONE,
        GestureLabel.THUMBS_DOWN,
    ]
    assert results[0].detect_time_s is not None


def test_detection_failure_is_recoverable_under_tolerant_policy() -> None:
    processor = _make_processor([RuntimeError("vision failed")])

    result = processor.process_image(0)

    assert result.status is FrameStatus.DETECTION_FAILED
    assert result.overlay.is_empty
    assert isinstance(result.error, DetectionFailedError)
    assert isinstance(result.error.__cause__, RuntimeError)
    assert result.detect_time_s is not None


def test_strict_policy_raises_detection_failed() -> None:
    processor = _make_processor(
        [RuntimeError("vision failed")],
        FrameProcessorConfig(error_policy=ErrorPolicy.STRICT),
    )

    with pytest.raises(DetectionFailedError) as exc_info:
        processor.process_image(0)

    assert isinstance(exc_info.value.__cause__, RuntimeError)
    assert processor.get_stats().detection_failures == 1


def test_detection_is_not_retried() -> None:
    detector = FakeDetector([RuntimeError("vision failed")])
    processor = FrameProcessor(detector=detector)

    processor.process_image(0)

    assert detector.calls == 1


def test_process_image_requires_detector() -> None:
    with pytest.raises(ProcessorError, match="requires a detector"):
        FrameProcessor().process_image(object())


def test_stats_track_outcomes() -> None:
    processor = _make_processor(
        [
            _make_frame(),
            _make_frame(thumb_tip_y=0.8),
            _make_frame(thumb_tip_y=0.8),
            None,
            RuntimeError("vision failed"),
        ]
    )

    list(processor.iter_results(range(5)))
    stats = processor.get_stats()

    assert stats.frames_processed == 5
    assert stats.hands_detected == 3
    assert stats.thumbs_up == 1
    assert stats.thumbs_down == 2
    assert stats.no_hand_frames == 1
    assert stats.detection_failures == 1

    processor.reset_stats()
    assert processor.get_stats().frames_processed == 0


def test_structured_log_hook_receives_events() -> None:
    events: list[FrameLogEvent] = []
    processor = _make_processor(
        [_make_frame(), None, RuntimeError("vision failed")],
        FrameProcessorConfig(log_hook=events.append),
    )

    list(processor.iter_results(range(3)))

    assert [event.kind for event in events] == [
        LogEventKind.CLASSIFIED,
        LogEventKind.NO_HAND,
        LogEventKind.DETECTION_FAILED,
    ]
    assert events[0].label is GestureLabel.THUMBS_UP
    assert events[0].bend_angle == pytest.approx(90.0)
    assert events[0].detect_time_s is not None
    assert isinstance(events[2].exception, RuntimeError)


def test_process_frame_has_no_detector_time() -> None:
    result = FrameProcessor().process_frame(_make_frame())

    assert result.detect_time_s is None


def test_run_callback_honors_max_frames() -> None:
    processor = _make_processor([_make_frame(), None, _make_frame()])

    seen: list[FrameResult] = []
    count = processor.run(range(3), seen.append, max_frames=2)

    assert count == 2
    assert len(seen) == 2


def test_callback_error_can_be_wrapped() -> None:
    processor = _make_processor([_make_frame()])

    def _bad_callback(_: FrameResult) -> None:
        raise RuntimeError("boom")

    with pytest.raises(ProcessorCallbackError):
        processor.run(range(1), _bad_callback, wrap_callback_exceptions=True)

    assert processor.get_stats().callback_errors == 1


def test_callback_error_propagates_unwrapped() -> None:
    processor = _make_processor([_make_frame()])

    def _bad_callback(_: FrameResult) -> None:
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError, match="boom"):
        processor.run(range(1), _bad_callback)


def test_invalid_processor_config_raises() -> None:
    with pytest.raises(ConfigurationError):
        FrameProcessorConfig(view_size=(0.0, 100.0))
