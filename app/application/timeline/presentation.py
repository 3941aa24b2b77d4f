"""Display attributes of timeline entries, dispatched on ``kind``."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, replace
from typing import Any

from app.domain.entities import TimelineEvent, TimelineEventKind


@dataclass(frozen=True)
class EventPresentation:
    """What a renderer needs to draw one entry."""

    label: str
    tone: str
    icon: str
    badge: str | None = None
    source_label: str | None = None


FALLBACK_PRESENTATION = EventPresentation(label="", tone="muted", icon="message-square")

_LEVEL_LABELS = {"high": "Alto", "medium": "Medio", "low": "Bajo"}
_LEVEL_TONES = {"high": "red", "medium": "orange"}
_CATEGORY_LABELS = {
    "revenue": "Ingresos",
    "cost": "Costo",
    "time": "Tiempo",
    "process": "Proceso",
    "clarity": "Claridad",
    "confidence": "Confianza",
    "tranquility": "Tranquilidad",
    "status_direction": "Dirección",
}
_SOURCE_LABELS = {
    "whatsapp_audio_transcript": "Audio transcrito",
    "whatsapp_text": "WhatsApp",
    "manual": "Agregado manualmente",
}
_PAYMENT_LABELS = {"active": "Activo", "overdue": "Atrasado", "cancelled": "Cancelado"}


def _message(metadata: Mapping[str, Any]) -> EventPresentation:
    from_client = metadata.get("direction") == "client_to_team"
    is_audio = metadata.get("source") == "whatsapp_audio_transcript"
    return EventPresentation(
        label="Cliente" if from_client else "Equipo",
        tone="blue" if from_client else "slate",
        icon="mic" if is_audio else "message-square",
    )


def _roi(metadata: Mapping[str, Any]) -> EventPresentation:
    tangible = metadata.get("roi_type") == "tangible"
    category = metadata.get("category")
    return EventPresentation(
        label="ROI tangible" if tangible else "ROI intangible",
        tone="emerald" if tangible else "teal",
        icon="trending-up",
        badge=_CATEGORY_LABELS.get(str(category)) if category else None,
    )


def _risk(metadata: Mapping[str, Any]) -> EventPresentation:
    level = str(metadata.get("level") or "low")
    return EventPresentation(
        label=f"Riesgo {_LEVEL_LABELS.get(level, 'Bajo').lower()}",
        tone=_LEVEL_TONES.get(level, "amber"),
        icon="alert-triangle",
        badge=_LEVEL_LABELS.get(level),
    )


def _recommendation(metadata: Mapping[str, Any]) -> EventPresentation:
    return EventPresentation(
        label="Recomendación",
        tone="violet",
        icon="lightbulb",
        badge=str(metadata["priority"]) if metadata.get("priority") else None,
    )


def _session(metadata: Mapping[str, Any]) -> EventPresentation:
    return EventPresentation(label="Sesión en vivo", tone="indigo", icon="video")


def _comment(metadata: Mapping[str, Any]) -> EventPresentation:
    automated = str(metadata.get("origin") or "manual") != "manual"
    return EventPresentation(
        label=str(metadata.get("user_name") or "Comentario"),
        tone="sky",
        icon="sparkles" if automated else "message-circle",
        badge="Automático" if automated else None,
    )


def _field_change(metadata: Mapping[str, Any]) -> EventPresentation:
    field_name = metadata.get("field")
    return EventPresentation(
        label=f"Campo {field_name} actualizado" if field_name else "Campo actualizado",
        tone="gray",
        icon="pencil",
    )


def _life_event(metadata: Mapping[str, Any]) -> EventPresentation:
    return EventPresentation(
        label="Momento CX",
        tone="pink",
        icon="heart",
        badge="Recurrente" if metadata.get("is_recurring") else None,
    )


def _financial(metadata: Mapping[str, Any]) -> EventPresentation:
    status = metadata.get("payment_status")
    overdue = status == "overdue"
    return EventPresentation(
        label="Financiero",
        tone="red" if overdue else "green",
        icon="dollar-sign",
        badge=_PAYMENT_LABELS.get(str(status), str(status)) if status else None,
    )


def _followup(metadata: Mapping[str, Any]) -> EventPresentation:
    kind = metadata.get("followup_type")
    return EventPresentation(
        label="Imagen adjunta" if kind == "image" else "Archivo adjunto",
        tone="cyan",
        icon="image" if kind == "image" else "paperclip",
    )


def _form_response(metadata: Mapping[str, Any]) -> EventPresentation:
    answers = metadata.get("form_responses") or {}
    count = len(answers) if isinstance(answers, Mapping) else 0
    return EventPresentation(
        label="Formulario",
        tone="purple",
        icon="clipboard",
        badge=f"{count} campo(s)" if count else None,
    )


_PRESENTERS: dict[str, Callable[[Mapping[str, Any]], EventPresentation]] = {
    TimelineEventKind.MESSAGE.value: _message,
    TimelineEventKind.ROI.value: _roi,
    TimelineEventKind.RISK.value: _risk,
    TimelineEventKind.RECOMMENDATION.value: _recommendation,
    TimelineEventKind.SESSION.value: _session,
    TimelineEventKind.COMMENT.value: _comment,
    TimelineEventKind.FIELD_CHANGE.value: _field_change,
    TimelineEventKind.LIFE_EVENT.value: _life_event,
    TimelineEventKind.FINANCIAL.value: _financial,
    TimelineEventKind.FOLLOWUP.value: _followup,
    TimelineEventKind.FORM_RESPONSE.value: _form_response,
}

_missing = {kind.value for kind in TimelineEventKind} - set(_PRESENTERS)
if _missing:  # pragma: no cover - guards additions to TimelineEventKind
    raise RuntimeError(f"Missing timeline presenters for: {sorted(_missing)}")


def present_event(event: TimelineEvent) -> EventPresentation:
    """Return the display attributes of ``event``.

    Kinds unknown to the renderer get :data:`FALLBACK_PRESENTATION` but are
    otherwise treated like any other entry.
    """

    presenter = _PRESENTERS.get(event.kind)
    metadata = event.metadata or {}
    if presenter is None:
        presentation = FALLBACK_PRESENTATION
    else:
        presentation = presenter(metadata)

    source = metadata.get("source")
    if source and presentation.source_label is None:
        return replace(
            presentation, source_label=_SOURCE_LABELS.get(str(source), str(source))
        )
    return presentation


__all__ = ["EventPresentation", "FALLBACK_PRESENTATION", "present_event"]
