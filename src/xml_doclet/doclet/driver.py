"""Document driver: one generation pass from element model to XML file.

The driver owns the output file for the whole pass. It opens the file
(truncating any previous content), writes the document prolog and the
``root`` element, lets the HierarchyWalker emit every package, and closes
everything again on every exit path. Failures at any stage are caught here,
once, and reported as a failed GenerationResult.
"""

import time
import uuid
from contextlib import ExitStack
from pathlib import Path
from typing import Any, Optional, Tuple, Union

import psutil

from ..character.transformation import CharacterSanitizer, SanitizeStrategy
from ..emitter.stream import XMLStreamEmitter
from ..model.elements import ElementModel
from ..shared.config import ConfigError, DocletConfig
from ..shared.logging import CorrelationLogger, get_logger
from ..shared.result import DiagnosticSeverity, GenerationResult
from .walker import HierarchyWalker, WalkStatistics

ROOT_TAG = "root"
COMPONENT = "document_driver"


class GenerationError(Exception):
    """Raised by DocumentDriver.generate_or_raise when generation fails."""

    def __init__(self, message: str, result: GenerationResult):
        super().__init__(message)
        self.result = result


class DocumentDriver:
    """Generate one XML document per call according to a DocletConfig."""

    def __init__(
        self,
        config: Optional[DocletConfig] = None,
        logger: Optional[CorrelationLogger] = None,
    ) -> None:
        self.config = config or DocletConfig()
        self.logger = logger or get_logger(__name__, self.config.correlation_id, COMPONENT)

    def generate(self, model: ElementModel) -> GenerationResult:
        """Write the document for model; never raises.

        Returns:
            A GenerationResult that is truthy exactly when the output file
            now holds a complete document
        """
        config = self.config
        correlation_id = config.correlation_id or uuid.uuid4().hex[:12]
        logger = self.logger.bind(correlation_id=correlation_id)
        output_path = config.output_path
        result = GenerationResult(
            success=False, output_path=output_path, correlation_id=correlation_id
        )

        try:
            config.validate_output_dir()
        except ConfigError as e:
            result.add_diagnostic(DiagnosticSeverity.ERROR, str(e), "config")
            logger.error(str(e), exc_info=False)
            return result

        for note in (
            f"Output directory: {config.output_dir}",
            f"Output filename: {config.filename}",
            f"Escape characters: {str(config.escape_characters).lower()}",
        ):
            result.add_diagnostic(DiagnosticSeverity.NOTE, note, COMPONENT)
            logger.info(note)

        process = psutil.Process()
        rss_before = process.memory_info().rss
        start_time = time.perf_counter()
        sink_state = {"opened": False}

        try:
            statistics, bytes_written, sanitized = self._write_document(
                model, output_path, logger, sink_state
            )
        except Exception as e:
            result.metrics.processing_time_ms = (time.perf_counter() - start_time) * 1000
            message = f"Error generating XML: {e}"
            result.add_diagnostic(
                DiagnosticSeverity.ERROR,
                message,
                COMPONENT,
                details={"exception": type(e).__name__},
            )
            logger.error(message, extra={"output_path": str(output_path)})
            if sink_state["opened"] and config.remove_partial_output:
                self._remove_partial_output(output_path, result, logger)
            return result

        metrics = result.metrics
        metrics.processing_time_ms = (time.perf_counter() - start_time) * 1000
        metrics.memory_used_bytes = max(0, process.memory_info().rss - rss_before)
        metrics.bytes_written = bytes_written
        metrics.packages = statistics.packages
        metrics.types = statistics.types
        metrics.fields = statistics.fields
        metrics.comments = statistics.comments
        metrics.skipped_members = statistics.skipped_members
        metrics.sanitized_characters = sanitized

        if sanitized:
            result.add_diagnostic(
                DiagnosticSeverity.WARNING,
                f"{sanitized} character(s) not allowed in XML 1.0 were "
                f"{'replaced' if config.invalid_char_strategy == 'replacement' else 'removed'}",
                COMPONENT,
            )

        result.success = True
        logger.info(
            f"Wrote {output_path}",
            extra={
                "packages": metrics.packages,
                "types": metrics.types,
                "fields": metrics.fields,
                "bytes_written": metrics.bytes_written,
                "processing_time_ms": metrics.processing_time_ms,
            },
        )
        return result

    def generate_or_raise(self, model: ElementModel) -> GenerationResult:
        """Like generate(), but raise GenerationError on failure."""
        result = self.generate(model)
        if not result:
            raise GenerationError(result.error_message or "Generation failed", result)
        return result

    def _write_document(
        self,
        model: ElementModel,
        output_path: Path,
        logger: CorrelationLogger,
        sink_state: dict,
    ) -> Tuple[WalkStatistics, int, int]:
        config = self.config
        sanitizer = CharacterSanitizer(SanitizeStrategy(config.invalid_char_strategy))
        walker = HierarchyWalker(
            model,
            escape_characters=config.escape_characters,
            sort_elements=config.sort_elements,
            logger=logger.bind(component="hierarchy_walker"),
        )

        with ExitStack() as stack:
            sink = stack.enter_context(open(output_path, "wb"))
            sink_state["opened"] = True
            emitter = stack.enter_context(
                XMLStreamEmitter(sink, sanitizer, logger.bind(component="xml_emitter"))
            )
            emitter.start_document(config.encoding, config.xml_version)
            emitter.start_element(ROOT_TAG)
            statistics = walker.emit(emitter)
            emitter.end_element()
            emitter.end_document()

        return statistics, emitter.bytes_written, emitter.sanitized_characters

    @staticmethod
    def _remove_partial_output(
        output_path: Path,
        result: GenerationResult,
        logger: CorrelationLogger,
    ) -> None:
        try:
            if output_path.is_file():
                output_path.unlink()
                logger.debug(f"Removed partial output {output_path}")
        except OSError as e:
            message = f"Could not remove partial output {output_path}: {e}"
            result.add_diagnostic(DiagnosticSeverity.WARNING, message, COMPONENT)
            logger.warning(message)


def generate(
    output_directory: Union[str, Path],
    filename: str,
    escape_mode: bool,
    document_root: ElementModel,
    **options: Any,
) -> GenerationResult:
    """Write ``output_directory/filename`` for document_root.

    Args:
        output_directory: Existing destination directory
        filename: Output file name
        escape_mode: True writes documentation text as supplied; False
            decodes escape sequences in it first
        document_root: The element model to document
        **options: Further DocletConfig fields (sort_elements, ...)

    Returns:
        GenerationResult, truthy on success
    """
    try:
        config = DocletConfig(
            output_dir=str(output_directory),
            filename=filename,
            escape_characters=escape_mode,
            **options,
        )
    except ConfigError as e:
        result = GenerationResult(success=False)
        result.add_diagnostic(DiagnosticSeverity.ERROR, str(e), "config")
        return result
    return DocumentDriver(config).generate(document_root)
