"""Generate inspection reports with the Gemini text API."""

from typing import Iterable

from google import genai

from ..config import settings
from ..config.constants import (
    CHECKED_TEXT,
    MSG_MISSING_API_KEY,
    MSG_REPORT_FAILED,
    NO_DEFECTS_TEXT,
    REPORT_PROMPT_FR,
    SIDE_LABELS_FR,
    UNCHECKED_TEXT,
)
from ..models.inspection import ChecklistItem, Defect
from ..models.report import InspectionReport
from ..utils.exceptions import ReportGenerationError
from ..utils.logger import get_logger

logger = get_logger(__name__)


def format_defects(defects: Iterable[Defect]) -> str:
    lines = [
        f"- Emplacement: {SIDE_LABELS_FR[d.side]}, Titre: {d.title}, Description: {d.description}"
        for d in defects
    ]
    return "\n".join(lines) if lines else NO_DEFECTS_TEXT


def format_checklist(checklist: Iterable[ChecklistItem]) -> str:
    return "\n".join(
        f"- {item.label}: {CHECKED_TEXT if item.checked else UNCHECKED_TEXT}" for item in checklist
    )


def build_prompt(defects: Iterable[Defect], checklist: Iterable[ChecklistItem]) -> str:
    """Build the report request sent to the model."""
    return REPORT_PROMPT_FR.format(
        defects=format_defects(defects),
        checklist=format_checklist(checklist),
    )


class ReportGenerator:
    """Turns the current defects and checklist into a Markdown report."""

    def __init__(self, api_key: str | None = None, model: str | None = None, client=None):
        """
        Args:
            api_key: Gemini API key (defaults to settings.gemini_api_key)
            model: Model name (defaults to settings.gemini_model)
            client: Preconfigured ``genai.Client`` (built from the key when omitted)
        """
        self.api_key = api_key if api_key is not None else settings.gemini_api_key
        self.model = model or settings.gemini_model
        self._client = client

    @property
    def client(self):
        if self._client is None:
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    def generate(self, defects: Iterable[Defect], checklist: Iterable[ChecklistItem]) -> str:
        """
        Generate the report text.

        Never raises: a missing API key or a provider failure is returned as
        a French error message.

        Args:
            defects: Session defects, in insertion order
            checklist: Current checklist state

        Returns:
            Markdown report, or an error message
        """
        return self.generate_report(defects, checklist).markdown

    def generate_report(
        self,
        defects: Iterable[Defect],
        checklist: Iterable[ChecklistItem],
        vehicle_name: str | None = None,
    ) -> InspectionReport:
        """Generate the report and flag whether it holds an error message."""
        if not self.api_key and self._client is None:
            logger.error("API key is missing.")
            return InspectionReport(vehicle_name=vehicle_name, markdown=MSG_MISSING_API_KEY, is_error=True)

        defects = list(defects)
        prompt = build_prompt(defects, checklist)
        logger.info(f"Requesting report from {self.model} for {len(defects)} defects")

        try:
            response = self.client.models.generate_content(model=self.model, contents=prompt)
            if not response.text:
                raise ReportGenerationError(f"Empty response from {self.model}")
        except Exception as e:
            logger.error(f"Error generating report with Gemini: {e}", exc_info=True)
            return InspectionReport(
                vehicle_name=vehicle_name,
                markdown=MSG_REPORT_FAILED.format(details=e),
                is_error=True,
            )

        text = response.text
        logger.info(f"Received report: {len(text)} characters")
        return InspectionReport(vehicle_name=vehicle_name, markdown=text)
