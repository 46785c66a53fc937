"""Documentation lookup pipeline.

Turns a (library, function, version) query into a prompt via the
Jinja2 template and asks the LLM client to explain it.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from doc_pilot.generators.llm_client import GenerationResult, LLMClient
from doc_pilot.generators.template_manager import TemplateManager

logger = logging.getLogger(__name__)


@dataclass
class DocQuery:
    """A single documentation request.

    Attributes:
        library: Library or package name, e.g. "react".
        function: Function or method name, e.g. "useState".
        version: Declared version specifier, e.g. "^18.2.0".
    """

    library: str
    function: str
    version: Optional[str] = None

    @property
    def version_context(self) -> str:
        """Human-readable version hint for the prompt, or ""."""
        if not self.version:
            return ""
        return f"version {self.version}"


class DocLookup:
    """Fetches an explanation of a library function from the LLM."""

    def __init__(
        self,
        llm_client: LLMClient,
        template_manager: Optional[TemplateManager] = None,
    ) -> None:
        self.llm = llm_client
        self.templates = template_manager or TemplateManager()

    def build_prompt(self, query: DocQuery) -> str:
        """Render the prompt text for a query."""
        return self.templates.render_lookup_prompt(query)

    def lookup(self, query: DocQuery) -> GenerationResult:
        """Ask the model to explain the queried function.

        Args:
            query: The documentation request.

        Returns:
            The generation result holding the explanation text.

        Raises:
            LLMError: If the remote call fails.
        """
        prompt = self.build_prompt(query)
        result = self.llm.generate(prompt)
        logger.info("Fetched docs for %s.%s", query.library, query.function)
        return result
