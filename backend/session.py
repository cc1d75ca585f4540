import logging

from floodscene import FloodScene

logger = logging.getLogger(__name__)


class SceneSession:
    """Holds the one scene served to the browser renderer."""

    def __init__(self) -> None:
        self.scene = FloodScene()

    def reset(self) -> FloodScene:
        logger.info("Scene session reset")
        self.scene = FloodScene()
        return self.scene


# Singleton instance used across the application
scene_session = SceneSession()
