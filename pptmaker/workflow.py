import logging
from pathlib import Path
from typing import List, Optional, Set, Union

from .analytics import Analytics
from .api_client import BackendClient
from .errors import BackendError
from .models import (
    DEFAULT_NUM_SLIDES,
    DEFAULT_TONE,
    MAX_SLIDES,
    MIN_SLIDES,
    Outline,
    Slide,
    SlideType,
    SlideTypeMode,
    Tone,
    ToneMode,
    renumbered,
)
from .storage import LocalStore, filename_from
from .templates import DEFAULT_TEMPLATE, Template, template_by_id

logger = logging.getLogger("pptmaker.workflow")

HISTORY_LOAD_ERROR = "Could not load outline data for this presentation"


class WorkflowController:
    """
    Topic -> outline -> edit -> template -> rendered file.

    Runs on one logical thread. The two generation calls are the only
    suspension points; each is guarded by its own in-flight flag, which is
    always cleared once the call resolves.
    """

    def __init__(self, client: BackendClient, store: LocalStore,
                 analytics: Optional[Analytics] = None, always_send_tone: bool = False):
        self.client = client
        self.store = store
        self.analytics = analytics or Analytics()
        self.always_send_tone = always_send_tone

        # Step 1: topic input
        self.topic: str = ""
        self.num_slides: int = DEFAULT_NUM_SLIDES
        self.slide_type_mode: SlideTypeMode = SlideTypeMode.DYNAMIC
        self.selected_slide_types: Set[SlideType] = set(SlideType)
        self.tone_mode: ToneMode = ToneMode.AUTO
        self.tone: Tone = DEFAULT_TONE
        self.custom_tone: str = ""

        # Step 2: generated outline (editable)
        self.outline: Optional[Outline] = None
        self.is_generating_outline: bool = False

        # Step 3: template + final file
        self.selected_template: Template = DEFAULT_TEMPLATE
        self.is_generating_presentation: bool = False
        self.generated_file: Optional[Path] = None

        # UI state
        self.error_message: Optional[str] = None
        self.show_success: bool = False
        self.show_outline_editor: bool = False

    # ---------- derived state ----------
    @property
    def can_generate_outline(self) -> bool:
        if not self.topic.strip() or self.is_generating_outline:
            return False
        if not MIN_SLIDES <= self.num_slides <= MAX_SLIDES:
            return False
        if self.slide_type_mode == SlideTypeMode.CUSTOM and not self.selected_slide_types:
            return False
        if self.tone_mode == ToneMode.CUSTOM and not self.custom_tone.strip():
            return False
        return True

    @property
    def can_generate_presentation(self) -> bool:
        return self.outline is not None and not self.is_generating_presentation

    @property
    def current_step(self) -> int:
        if self.outline is None:
            return 1
        if self.generated_file is None:
            return 2
        return 3

    def allowed_slide_types(self) -> Optional[List[str]]:
        if self.slide_type_mode == SlideTypeMode.DYNAMIC:
            return None
        # Catalog order keeps the request stable regardless of selection order.
        return [t.value for t in SlideType if t in self.selected_slide_types]

    def resolved_tone(self) -> Optional[str]:
        if self.tone_mode == ToneMode.CUSTOM:
            return self.custom_tone.strip()
        if self.tone_mode == ToneMode.PRESET:
            return self.tone.value
        return DEFAULT_TONE.value if self.always_send_tone else None

    def clear_error(self) -> None:
        self.error_message = None

    # ---------- step 1 ----------
    async def generate_outline(self) -> bool:
        """Returns True when a new outline was stored."""
        if not self.can_generate_outline:
            return False

        self.is_generating_outline = True
        self.error_message = None
        tone = self.resolved_tone()
        try:
            outline = await self.client.request_outline(
                topic=self.topic.strip(),
                num_slides=self.num_slides,
                tone=tone,
                allowed_slide_types=self.allowed_slide_types(),
            )
        except BackendError as e:
            logger.error("outline generation failed: %s", e.message)
            self.error_message = e.message
            self.analytics.outline_generation_failed(e.message)
            return False
        else:
            self.outline = outline
            self.generated_file = None
            self.show_success = False
            self.show_outline_editor = True
            logger.info("outline ready: %r with %d slides", outline.presentation_title, len(outline.slides))
            self.analytics.outline_generated(num_slides=self.num_slides, tone=tone or ToneMode.AUTO.value)
            return True
        finally:
            self.is_generating_outline = False

    # ---------- step 2 ----------
    def update_slide(self, index: int, new_slide: Slide) -> bool:
        if self.outline is None or not 0 <= index < len(self.outline.slides):
            return False
        self.outline.slides[index] = new_slide
        self.analytics.slide_edited()
        return True

    def remove_slide(self, index: int) -> bool:
        if self.outline is None or not 0 <= index < len(self.outline.slides):
            return False
        slides = list(self.outline.slides)
        del slides[index]
        self.outline.slides = renumbered(slides)
        self.analytics.slide_removed()
        return True

    def select_template(self, template: Union[Template, str]) -> None:
        if isinstance(template, str):
            found = template_by_id(template)
            if found is None:
                raise ValueError(f"Unknown template: {template}")
            template = found
        self.selected_template = template
        self.analytics.template_selected(template.id)

    # ---------- step 3 ----------
    async def generate_presentation(self) -> bool:
        """Returns True when the rendered file and its sidecar were saved."""
        outline = self.outline
        if outline is None or not self.can_generate_presentation:
            return False

        self.is_generating_presentation = True
        self.error_message = None
        template_id = self.selected_template.id
        path: Optional[Path] = None
        try:
            data = await self.client.request_presentation_file(
                title=outline.presentation_title,
                slides=outline.slides,
                template_id=template_id,
            )
            path = self.store.save(data, filename_from(outline.presentation_title))
            # The saved copy is independent of the outline still being edited.
            saved = outline.model_copy(update={"template": template_id}, deep=True)
            self.store.save_outline_sidecar(saved, path)
        except BackendError as e:
            logger.error("presentation generation failed: %s", e.message)
            self.error_message = e.message
            self.analytics.presentation_generation_failed(e.message)
            return False
        except OSError as e:
            message = f"Could not save presentation: {e}"
            logger.error(message)
            if path is not None:
                # A file without its sidecar could never be reopened from history.
                try:
                    path.unlink(missing_ok=True)
                except OSError as cleanup_error:
                    logger.warning("could not remove %s: %r", path.name, cleanup_error)
            self.error_message = message
            self.analytics.presentation_generation_failed(message)
            return False
        else:
            self.generated_file = path
            self.show_success = True
            self.analytics.presentation_generated(template=template_id, num_slides=len(outline.slides))
            return True
        finally:
            self.is_generating_presentation = False

    # ---------- history ----------
    def history(self) -> List[Path]:
        self.analytics.history_viewed()
        return self.store.list()

    def load_from_history(self, path: Path) -> bool:
        lookup = self.store.read_outline_sidecar(path)
        if lookup.outline is None:
            self.error_message = HISTORY_LOAD_ERROR
            return False

        self.outline = lookup.outline
        self.topic = ""  # editing a past file, not a fresh topic
        self.generated_file = None
        self.show_success = False
        self.show_outline_editor = True
        template = template_by_id(lookup.outline.template)
        if template is not None:
            self.selected_template = template
        logger.info("loaded outline from %s", Path(path).name)
        return True

    def delete_from_history(self, path: Path) -> None:
        self.store.delete(path)
        if self.generated_file is not None and Path(path) == self.generated_file:
            self.generated_file = None
            self.show_success = False

    # ---------- reset ----------
    def reset(self) -> None:
        self.reset_after_success()
        self.selected_template = DEFAULT_TEMPLATE
        self.error_message = None

    def reset_after_success(self) -> None:
        """Start over but keep the chosen template."""
        self.topic = ""
        self.num_slides = DEFAULT_NUM_SLIDES
        self.outline = None
        self.generated_file = None
        self.show_success = False
        self.show_outline_editor = False
