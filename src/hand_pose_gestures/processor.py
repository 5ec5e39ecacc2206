"""Per-frame pipeline from detector output to gesture label and overlay."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field, replace
from enum import StrEnum
from time import perf_counter
from typing import Any

from hand_pose_gestures.classifier import ClassifierConfig, classify_with_angle, is_valid_frame
from hand_pose_gestures.convert import scale_hand_frame_to_view
from hand_pose_gestures.exceptions import (
    ConfigurationError,
    DetectionFailedError,
    ProcessorCallbackError,
    ProcessorError,
)
from hand_pose_gestures.models import GestureLabel, HandFrame
from hand_pose_gestures.overlay import Overlay, OverlayStyle, build_overlay, empty_overlay

Detector = Callable[[Any], HandFrame | None]
"""Hand-pose oracle: returns one frame, or ``None`` when no hand is visible."""


class FrameStatus(StrEnum):
    """Outcome of processing one video frame."""

    HAND = "hand"
    NO_HAND = "no_hand"
    DETECTION_FAILED = "detection_failed"


class ErrorPolicy(StrEnum):
    """Error policy applied to detector failures."""

    STRICT = "strict"
    TOLERANT = "tolerant"


class LogEventKind(StrEnum):
    """Structured log event kinds emitted by :class:`FrameProcessor`."""

    DETECTION_FAILED = "detection_failed"
    NO_HAND = "no_hand"
    CLASSIFIED = "classified"
    CALLBACK_ERROR = "callback_error"


@dataclass(frozen=True, slots=True)
class FrameLogEvent:
    """Structured processor log event for observability hooks.

    :param kind:
        Event kind discriminator.
    :param message:
        Human-readable event message.
    :param label:
        Optional gesture label associated with the event.
    :param bend_angle:
        Optional middle-finger bend angle in degrees.
    :param detect_time_s:
        Optional detector wall time in seconds.
    :param exception:
        Optional exception associated with the event.
    """

    kind: LogEventKind
    message: str
    label: GestureLabel | None = None
    bend_angle: float | None = None
    detect_time_s: float | None = None
    exception: Exception | None = None


@dataclass(frozen=True, slots=True)
class ProcessorStats:
    """Observable counters for :class:`FrameProcessor` runtime behavior."""

    frames_processed: int = 0
    hands_detected: int = 0
    no_hand_frames: int = 0
    detection_failures: int = 0
    thumbs_up: int = 0
    thumbs_down: int = 0
    callbacks_invoked: int = 0
    callback_errors: int = 0


@dataclass(frozen=True, slots=True)
class FrameResult:
    """Everything produced for one video frame.

    :param status:
        Whether a valid hand was found, no hand was found, or detection failed.
    :param label:
        Gesture label, :attr:`GestureLabel.NONE` unless a hand was classified.
    :param overlay:
        Geometry to hand to the renderer; empty unless status is ``hand``.
    :param bend_angle:
        Middle-finger bend angle in degrees for valid frames.
    :param frame:
        Frame the result was computed from, after optional view scaling.
    :param error:
        Detection error for ``detection_failed`` results.
    :param detect_time_s:
        Detector wall time in seconds when a detector was invoked.
    """

    status: FrameStatus
    label: GestureLabel
    overlay: Overlay
    bend_angle: float | None = None
    frame: HandFrame | None = None
    error: DetectionFailedError | None = None
    detect_time_s: float | None = None


@dataclass(frozen=True, slots=True)
class FrameProcessorConfig:
    """Configuration for :class:`FrameProcessor`.

    :param classifier:
        Thresholds for gesture classification.
    :param style:
        Overlay colors and sizes.
    :param error_policy:
        ``tolerant`` clears the overlay and moves on when detection fails;
        ``strict`` raises :class:`DetectionFailedError`.
    :param view_size:
        Optional ``(width, height)``. When set, normalized frames are scaled into
        view units before classification and overlay construction.
    :param log_hook:
        Optional structured log callback invoked for each processed frame.
    """

    classifier: ClassifierConfig = field(default_factory=ClassifierConfig)
    style: OverlayStyle = field(default_factory=OverlayStyle)
    error_policy: ErrorPolicy = ErrorPolicy.TOLERANT
    view_size: tuple[float, float] | None = None
    log_hook: Callable[[FrameLogEvent], None] | None = None

    def __post_init__(self) -> None:
        """Validate configuration constraints.

        :raises ConfigurationError:
            If ``view_size`` is not a pair of positive numbers.
        """
        if self.view_size is not None:
            if len(self.view_size) != 2 or any(value <= 0 for value in self.view_size):
                raise ConfigurationError("view_size must be a (width, height) pair of positives.")


class FrameProcessor:
    """Turn detector output into labels and overlays, one frame at a time.

    Frames are independent: no state other than counters survives between calls.
    """

    def __init__(
        self,
        config: FrameProcessorConfig | None = None,
        *,
        detector: Detector | None = None,
    ) -> None:
        """Create a frame processor.

        :param config:
            Optional processor configuration.
        :param detector:
            Optional hand-pose oracle used by :meth:`process_image`.
        """
        self._config = config or FrameProcessorConfig()
        self._detector = detector
        self._stats = ProcessorStats()

    def process_frame(self, frame: HandFrame | None) -> FrameResult:
        """Classify one frame and build its overlay.

        :param frame:
            Hand frame in display coordinates, or ``None`` when no hand was detected.
        :returns:
            Result with ``hand`` status for valid frames, ``no_hand`` otherwise.
        """
        return self._process(frame, detect_time_s=None)

    def _process(self, frame: HandFrame | None, *, detect_time_s: float | None) -> FrameResult:
        """Classify and draw one frame, attaching the detector time if known."""
        if frame is not None and self._config.view_size is not None:
            width, height = self._config.view_size
            frame = scale_hand_frame_to_view(frame, width, height)

        self._stats = replace(self._stats, frames_processed=self._stats.frames_processed + 1)
        classifier = self._config.classifier
        if not is_valid_frame(frame, confidence_threshold=classifier.confidence_threshold):
            self._stats = replace(self._stats, no_hand_frames=self._stats.no_hand_frames + 1)
            self._emit_log(
                FrameLogEvent(
                    kind=LogEventKind.NO_HAND,
                    message="No reliable hand in frame.",
                    detect_time_s=detect_time_s,
                )
            )
            return FrameResult(
                status=FrameStatus.NO_HAND,
                label=GestureLabel.NONE,
                overlay=empty_overlay(self._config.style),
                frame=frame,
                detect_time_s=detect_time_s,
            )

        classification = classify_with_angle(frame, classifier)
        self._stats = replace(
            self._stats,
            hands_detected=self._stats.hands_detected + 1,
            thumbs_up=self._stats.thumbs_up
            + int(classification.label is GestureLabel.THUMBS_UP),
            thumbs_down=self._stats.thumbs_down
            + int(classification.label is GestureLabel.THUMBS_DOWN),
        )
        self._emit_log(
            FrameLogEvent(
                kind=LogEventKind.CLASSIFIED,
                message=(
                    f"Classified {classification.label.value}"
                    f" at bend angle {classification.bend_angle:.1f}."
                ),
                label=classification.label,
                bend_angle=classification.bend_angle,
                detect_time_s=detect_time_s,
            )
        )
        return FrameResult(
            status=FrameStatus.HAND,
            label=classification.label,
            overlay=build_overlay(
                frame,
                classification.label,
                style=self._config.style,
                confidence_threshold=classifier.confidence_threshold,
            ),
            bend_angle=classification.bend_angle,
            frame=frame,
            detect_time_s=detect_time_s,
        )

    def process_image(self, image: Any) -> FrameResult:
        """Run the detector on one image and process its output.

        A detector failure aborts only the current frame; there is no retry.

        :param image:
            Opaque input passed through to the detector.
        :returns:
            Frame result. Under the tolerant policy a failed detection yields a
            ``detection_failed`` result with an empty overlay.
        :raises ProcessorError:
            If no detector was configured.
        :raises DetectionFailedError:
            When ``error_policy=strict`` and the detector raises.
        """
        if self._detector is None:
            raise ProcessorError("process_image requires a detector.")

        start = perf_counter()
        try:
            frame = self._detector(image)
        except Exception as exc:
            return self._handle_detection_failure(exc, detect_time_s=perf_counter() - start)
        detect_time_s = perf_counter() - start

        return self._process(frame, detect_time_s=detect_time_s)

    def iter_results(self, images: Iterable[Any]) -> Iterator[FrameResult]:
        """Yield one :class:`FrameResult` per input image.

        :param images:
            Opaque detector inputs, one per video frame.
        :raises DetectionFailedError:
            When ``error_policy=strict`` and the detector raises.
        """
        for image in images:
            yield self.process_image(image)

    def run(
        self,
        images: Iterable[Any],
        callback: Callable[[FrameResult], None],
        *,
        max_frames: int | None = None,
        wrap_callback_exceptions: bool = False,
    ) -> int:
        """Process images and invoke ``callback`` with each result.

        :param images:
            Opaque detector inputs, one per video frame.
        :param callback:
            Function called for each frame result, typically a renderer.
        :param max_frames:
            Optional cap on processed frames.
        :param wrap_callback_exceptions:
            If ``True``, callback exceptions are re-raised as
            :class:`ProcessorCallbackError`.
        :returns:
            Number of callback invocations performed.
        :raises ProcessorCallbackError:
            When callback raises and wrapping is enabled.
        """
        processed = 0
        for result in self.iter_results(images):
            try:
                callback(result)
            except Exception as exc:
                self._stats = replace(self._stats, callback_errors=self._stats.callback_errors + 1)
                self._emit_log(
                    FrameLogEvent(
                        kind=LogEventKind.CALLBACK_ERROR,
                        message="Callback raised an exception.",
                        exception=exc,
                    )
                )
                if wrap_callback_exceptions:
                    raise ProcessorCallbackError("Callback failed during frame processing.") from exc
                raise

            processed += 1
            self._stats = replace(self._stats, callbacks_invoked=self._stats.callbacks_invoked + 1)
            if max_frames is not None and processed >= max_frames:
                return processed
        return processed

    def get_stats(self) -> ProcessorStats:
        """Return a snapshot of current processor counters."""
        return self._stats

    def reset_stats(self) -> None:
        """Reset processor counters to zero values."""
        self._stats = ProcessorStats()

    def _handle_detection_failure(self, exc: Exception, *, detect_time_s: float) -> FrameResult:
        """Record one detector failure and clear the overlay for that frame."""
        error = (
            exc
            if isinstance(exc, DetectionFailedError)
            else DetectionFailedError(f"Hand-pose detection failed: {exc}")
        )
        if error is not exc:
            error.__cause__ = exc

        self._stats = replace(
            self._stats,
            frames_processed=self._stats.frames_processed + 1,
            detection_failures=self._stats.detection_failures + 1,
        )
        self._emit_log(
            FrameLogEvent(
                kind=LogEventKind.DETECTION_FAILED,
                message="Detector raised an exception.",
                detect_time_s=detect_time_s,
                exception=exc,
            )
        )
        if self._config.error_policy == ErrorPolicy.STRICT:
            raise error

        return FrameResult(
            status=FrameStatus.DETECTION_FAILED,
            label=GestureLabel.NONE,
            overlay=empty_overlay(self._config.style),
            error=error,
            detect_time_s=detect_time_s,
        )

    def _emit_log(self, event: FrameLogEvent) -> None:
        """Emit one structured log event if a hook is configured."""
        if self._config.log_hook is not None:
            self._config.log_hook(event)
