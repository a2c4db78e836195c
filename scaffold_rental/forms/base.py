"""Draft handling shared by the entity forms.

A form is closed (IDLE) until opened in CREATE or EDIT mode. Submitting runs
the field validators first and only talks to the store when every field
passes. A remote failure keeps the draft so the user can correct and retry.
"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Generic, TypeVar

import pydantic

from scaffold_rental.agents.records import RecordStore
from scaffold_rental.errors import ReadOnlyFieldError, StoreError
from scaffold_rental.notifications import Notifier
from scaffold_rental.schemas.base import Record
from scaffold_rental.validation import parse_number

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=Record)


class FormMode(str, Enum):
    CREATE = "create"
    EDIT = "edit"


class FormState(str, Enum):
    IDLE = "idle"
    EDITING = "editing"
    SHOWING_ERRORS = "showing_errors"
    SUBMITTING = "submitting"


@dataclass
class SubmitResult:
    ok: bool
    record: Record | None = None
    errors: dict[str, str] = field(default_factory=dict)
    error: StoreError | None = None


class FormController(Generic[RecordT]):
    model: type[RecordT]
    numeric_fields: tuple[str, ...] = ()

    created_message: str
    updated_message: str
    save_failed_message: str

    def __init__(self, store: RecordStore[RecordT], notifier: Notifier | None = None, on_close: Callable[[RecordT | None], None] | None = None):
        self.store = store
        self.notifier = notifier or Notifier()
        self.on_close = on_close
        self._reset()

    def _reset(self):
        self.state = FormState.IDLE
        self.mode: FormMode | None = None
        self.draft: dict[str, Any] = {}
        self.errors: dict[str, str] = {}
        self.original_key: str | None = None
        self.last_error: StoreError | None = None

    @property
    def is_open(self) -> bool:
        return self.state != FormState.IDLE

    @property
    def key_field(self) -> str:
        return self.model.key_field

    def defaults(self) -> dict[str, Any]:
        raise NotImplementedError

    def validate(self, draft: dict[str, Any]) -> dict[str, str]:
        """Return one message per failing field; empty when the draft is valid."""
        raise NotImplementedError

    async def validate_references(self, draft: dict[str, Any]) -> dict[str, str]:
        return {}

    def open_create(self):
        self._reset()
        self.mode = FormMode.CREATE
        self.draft = self.defaults()
        self.state = FormState.EDITING

    def open_edit(self, record: RecordT):
        self._reset()
        self.mode = FormMode.EDIT
        self.draft = record.model_dump()
        self.original_key = record.key
        self.state = FormState.EDITING

    def set_field(self, name: str, value: Any):
        if not self.is_open:
            raise RuntimeError("Form is not open")
        if name not in self.draft:
            raise KeyError(name)
        if self.mode == FormMode.EDIT and name == self.key_field:
            raise ReadOnlyFieldError(name)
        self.draft[name] = value
        self.errors.pop(name, None)
        if self.state == FormState.SHOWING_ERRORS and not self.errors:
            self.state = FormState.EDITING

    def build_record(self) -> RecordT:
        values = dict(self.draft)
        for name in self.numeric_fields:
            number = parse_number(values.get(name))
            if number is not None:
                values[name] = int(number)
        return self.model.model_validate(values)

    def _show_errors(self, errors: dict[str, str]) -> SubmitResult:
        self.errors = errors
        self.state = FormState.SHOWING_ERRORS
        return SubmitResult(ok=False, errors=dict(errors))

    def _remote_failure(self, record: RecordT, error: StoreError) -> SubmitResult:
        logger.info(f"Saving {self.store.collection} record {record.key} failed: {error.message}")
        self.last_error = error
        self.state = FormState.EDITING
        self.notifier.error(error.message or self.save_failed_message)
        return SubmitResult(ok=False, record=record, error=error)

    async def submit(self) -> SubmitResult:
        if not self.is_open:
            raise RuntimeError("Form is not open")
        if self.state == FormState.SUBMITTING:
            raise RuntimeError("A submission is already in progress")

        errors = self.validate(self.draft)
        if errors:
            return self._show_errors(errors)

        try:
            record = self.build_record()
        except pydantic.ValidationError as e:
            names = {info.alias or name: name for name, info in self.model.model_fields.items()}
            return self._show_errors({names.get(str(err["loc"][0]), str(err["loc"][0])): err["msg"] for err in e.errors()})

        self.state = FormState.SUBMITTING
        try:
            reference_errors = await self.validate_references(self.draft)
        except StoreError as e:
            return self._remote_failure(record, e)
        if reference_errors:
            return self._show_errors(reference_errors)

        try:
            if self.mode == FormMode.EDIT:
                await self.store.update(self.original_key, record)
            else:
                await self.store.add(record)
        except StoreError as e:
            return self._remote_failure(record, e)

        self.notifier.success(self.updated_message if self.mode == FormMode.EDIT else self.created_message)
        self._reset()
        if self.on_close:
            self.on_close(record)
        return SubmitResult(ok=True, record=record)

    def cancel(self):
        self._reset()
        if self.on_close:
            self.on_close(None)
