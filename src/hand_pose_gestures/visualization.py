"""Optional real-time overlay visualization helpers."""

from __future__ import annotations

import importlib
from dataclasses import dataclass
from types import ModuleType

from hand_pose_gestures.exceptions import VisualizationDependencyError
from hand_pose_gestures.overlay import FingerPath, Overlay
from hand_pose_gestures.processor import FrameResult


@dataclass(frozen=True, slots=True)
class RerunVisualizerConfig:
    """Configuration for :class:`RerunVisualizer`.

    :param application_id:
        Application identifier displayed in Rerun.
    :param spawn:
        If ``True``, spawn a local Rerun viewer on initialization.
    :param root_path:
        Entity path under which overlay geometry is logged.
    :param background_color:
        Optional RGB background color for the Rerun 2D view.
    """

    application_id: str = "hand-pose-gestures"
    spawn: bool = True
    root_path: str = "overlay"
    background_color: tuple[int, int, int] | None = (18, 22, 30)


class RerunVisualizer:
    """Visualizer that logs overlay geometry to `rerun`.

    This component is optional and requires installing the visualization extra.
    """

    def __init__(self, config: RerunVisualizerConfig | None = None) -> None:
        """Create a Rerun visualizer.

        :param config:
            Optional visualizer configuration.
        :raises VisualizationDependencyError:
            If `rerun-sdk` is not installed.
        """
        self._config = config or RerunVisualizerConfig()
        self._rr = self._import_rerun()
        self._rr.init(self._config.application_id, spawn=self._config.spawn)
        self._apply_view_background()

    def log_overlay(self, overlay: Overlay) -> None:
        """Log one overlay, clearing previously drawn geometry when it is empty.

        :param overlay:
            Overlay geometry for the current frame.
        """
        root = self._config.root_path
        if overlay.is_empty:
            self._rr.log(root, self._rr.Clear(recursive=True))
            return

        for path in overlay.fingers:
            self._log_finger(f"{root}/{path.finger.value}", path)
        self._rr.log(f"{root}/label", self._rr.TextDocument(overlay.label))

    def log_result(self, result: FrameResult) -> None:
        """Log the overlay carried by one processor result.

        :param result:
            Frame result from :class:`hand_pose_gestures.FrameProcessor`.
        """
        self.log_overlay(result.overlay)

    def _log_finger(self, path: str, finger: FingerPath) -> None:
        if finger.is_empty:
            self._rr.log(path, self._rr.Clear(recursive=True))
            return

        color = list(finger.color)
        self._rr.log(
            f"{path}/joints",
            self._rr.Points2D(
                [[circle.center.x, circle.center.y] for circle in finger.circles],
                radii=[circle.radius for circle in finger.circles],
                colors=[color] * len(finger.circles),
            ),
        )
        self._rr.log(
            f"{path}/bones",
            self._rr.LineStrips2D(
                [
                    [[segment.start.x, segment.start.y], [segment.end.x, segment.end.y]]
                    for segment in finger.segments
                ],
                radii=[finger.line_width / 2.0] * len(finger.segments),
                colors=[color] * len(finger.segments),
            ),
        )

    def _import_rerun(self) -> ModuleType:
        try:
            module = importlib.import_module("rerun")
        except ModuleNotFoundError as exc:
            raise VisualizationDependencyError(
                "rerun is not installed. Install with: pip install hand-pose-gestures[visualization]"
            ) from exc

        return module

    def _apply_view_background(self) -> None:
        """Apply optional background color to the default 2D view."""
        if self._config.background_color is None:
            return

        if not hasattr(self._rr, "send_blueprint"):
            return

        try:
            blueprint_module = importlib.import_module("rerun.blueprint")
        except ModuleNotFoundError:
            return

        blueprint = blueprint_module.Blueprint(
            blueprint_module.Spatial2DView(
                origin="/",
                name="Hand Overlay",
                background=list(self._config.background_color),
            )
        )
        self._rr.send_blueprint(blueprint)
