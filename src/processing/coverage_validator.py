from data_acquisition.document_loader import DocumentLoader
from processing.base_processor import BaseProcessor
from processing.concept_evaluator import evaluate
from utils.data_helpers import load_chapter_specs, select_chapters
from utils.schemas import ChapterReport, ChapterSpec, RunReport, Verdict

class CoverageValidator(BaseProcessor):
    """
    Checks every registered chapter for existence and concept coverage.
    """
    def __init__(self, cfg_manager, chapter_ids=None, specs=None):
        """
        Args:
            cfg_manager: A ConfigManager (or compatible) instance.
            chapter_ids (list, optional): Restrict the run to these chapter ids.
            specs (list, optional): ChapterSpec objects to use instead of
                                    reading the registry file.
        """
        super().__init__(cfg_manager)

        self.validation_config = self.config['content_validation']
        self.docs_root = self.cfg_manager.get_path('content_validation.docs_root')
        self.registry_path = self.cfg_manager.get_path('content_validation.registry_path')
        self.chapter_ids = list(chapter_ids or [])
        self._specs = specs

        self.loader = DocumentLoader(
            self.docs_root,
            extensions=self.validation_config.get('extensions', ['.md', '.mdx']),
        )

    def _show_progress(self) -> bool:
        return bool(self.validation_config.get('show_progress', False))

    def _load_items(self) -> list:
        specs = self._specs if self._specs is not None else load_chapter_specs(self.registry_path)
        return select_chapters(specs, self.chapter_ids)

    def _process_item(self, item: ChapterSpec) -> ChapterReport:
        return self.validate_chapter(item)

    def _build_result(self, results: list) -> RunReport:
        return RunReport(chapters=tuple(results))

    def validate_chapter(self, spec: ChapterSpec) -> ChapterReport:
        """
        Loads the chapter and evaluates each of its concepts in declared order.
        A missing chapter still has all of its concepts evaluated (against
        empty text) so the report lists every one of them.
        """
        document = self.loader.load(spec.doc_id)
        verdicts = tuple(
            Verdict(concept_name=concept.name, satisfied=evaluate(concept, document))
            for concept in spec.concepts
        )
        return ChapterReport(
            chapter_id=spec.doc_id,
            title=spec.title,
            document_exists=document.exists,
            document_empty=document.exists and document.is_empty,
            verdicts=verdicts,
        )
