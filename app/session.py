import logging
from typing import Optional
from app.classifiers.base import ClassificationProvider
from app.errors import SessionBusyError
from app.models import ScanResult
from app.models.bins import get_bin

logger = logging.getLogger(__name__)


class CaptureSession:
    """One capture/classify cycle at a time for a single user.

    `processing` guards against overlapping cycles. `reset()` (retake / scan
    again) does not cancel a request that is already in flight, it only makes
    the session drop that request's result when it arrives.
    """

    def __init__(self, classifier: ClassificationProvider):
        self.classifier = classifier
        self.processing = False
        self.last_result: Optional[ScanResult] = None
        self._cycle = 0

    async def scan(self, image: str) -> Optional[ScanResult]:
        """Run presence check, then classification if trash was found.

        Returns None if the session was reset while the cycle was running.
        """
        if self.processing:
            raise SessionBusyError("A capture is already being processed")

        self.processing = True
        self._cycle += 1
        cycle = self._cycle
        try:
            result = await self._run(image)
        finally:
            # an abandoned cycle still holds the guard until its request settles
            self.processing = False

        if cycle != self._cycle:
            logger.info(f"Discarding result of abandoned capture cycle {cycle}")
            return None
        self.last_result = result
        return result

    async def _run(self, image: str) -> ScanResult:
        has_trash = await self.classifier.check_presence(image)
        if not has_trash:
            logger.info("No trash detected in image")
            return ScanResult(has_trash=False, provider=self.classifier.name)

        classification = await self.classifier.classify(image)
        logger.info(f"Classified image as {classification}")
        return ScanResult(
            has_trash=True,
            classification=classification,
            bin=get_bin(classification.category),
            provider=self.classifier.name,
        )

    def reset(self):
        """Forget the last result and abandon any in-flight cycle.

        The in-flight request keeps `processing` set until it settles.
        """
        self.last_result = None
        self._cycle += 1
