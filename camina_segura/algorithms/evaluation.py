"""
Personal safety self-evaluation questionnaire.

Each answer carries a risk value from 0 to 3; the overall risk percentage is
the share of the maximum possible risk. Completed evaluations are stored with
the user's location and later bias the point scorer near that spot.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from ..data.models import Recommendation

logger = logging.getLogger(__name__)

MAX_ANSWER_RISK = 3

# question id -> option value -> risk
QUESTIONS: Dict[str, Dict[str, int]] = {
    'time': {'day': 0, 'evening': 1, 'night': 3},
    'people': {'crowded': 0, 'moderate': 1, 'few': 2, 'alone': 3},
    'lighting': {'bright': 0, 'moderate': 1, 'dim': 2, 'dark': 3},
    'area': {'commercial': 0, 'residential': 1, 'industrial': 2, 'isolated': 3},
    'feeling': {'safe': 0, 'alert': 1, 'uncomfortable': 2, 'unsafe': 3},
    'transport': {'yes-near': 0, 'yes-walk': 1, 'far': 2, 'no': 3},
}

RISK_LEVELS = [
    (25.0, 'Seguro'),
    (50.0, 'Precaución'),
    (75.0, 'Riesgo Moderado'),
]
HIGHEST_RISK_LEVEL = 'Alto Riesgo'


@dataclass(frozen=True)
class RiskAssessment:
    level: str
    percentage: float
    responses: Dict[str, Dict[str, Any]]


def normalize_responses(answers: Mapping[str, Any]) -> Dict[str, Dict[str, Any]]:
    """
    Turn questionnaire answers into ``{question: {value, risk}}``.

    An answer may be the option value (``'dark'``) or an explicit
    ``{'value': ..., 'risk': ...}`` mapping.

    Raises:
        ValueError: For unknown questions, unknown options or out-of-range risks
    """
    responses = {}
    for question_id, answer in answers.items():
        if question_id not in QUESTIONS:
            raise ValueError(f"Unknown question '{question_id}'")
        options = QUESTIONS[question_id]

        value = answer.get('value') if isinstance(answer, Mapping) else answer
        if value is not None and not isinstance(value, str):
            raise ValueError(f"Answer to '{question_id}' must be an option name")

        risk = options.get(value)
        if isinstance(answer, Mapping):
            risk = answer.get('risk', risk)

        if risk is None:
            raise ValueError(f"Unknown option '{value}' for question '{question_id}'")
        if not isinstance(risk, int) or isinstance(risk, bool) or not 0 <= risk <= MAX_ANSWER_RISK:
            raise ValueError(f"Risk for '{question_id}' must be an integer 0-{MAX_ANSWER_RISK}")
        responses[question_id] = {'value': value, 'risk': risk}
    return responses


def calculate_risk(answers: Mapping[str, Any]) -> RiskAssessment:
    """
    Score a questionnaire.

    Unanswered questions count as zero risk, but the denominator always
    covers every question.

    Returns:
        RiskAssessment with level label and percentage (0-100)
    """
    responses = normalize_responses(answers)
    total_risk = sum(r['risk'] for r in responses.values())
    max_risk = len(QUESTIONS) * MAX_ANSWER_RISK
    percentage = total_risk / max_risk * 100

    level = HIGHEST_RISK_LEVEL
    for upper_bound, label in RISK_LEVELS:
        if percentage < upper_bound:
            level = label
            break

    logger.info(f"Self-evaluation risk {percentage:.1f}% ({level})")
    return RiskAssessment(level=level, percentage=percentage, responses=responses)


def evaluation_recommendations(responses: Mapping[str, Dict[str, Any]],
                               percentage: float) -> List[Recommendation]:
    """Advice derived from individual answers and the overall risk."""
    recs = []

    def risk_of(question_id: str) -> Optional[int]:
        answer = responses.get(question_id)
        return answer.get('risk') if answer else None

    if (risk_of('feeling') or 0) >= 2:
        recs.append(Recommendation(
            priority='high', icon='🚨',
            message='Confía en tu instinto. Si te sientes insegura, activa el botón de pánico '
                    'o llama a un contacto de confianza ahora.',
            action='Activar Pánico'
        ))
    if (risk_of('time') or 0) >= 2:
        recs.append(Recommendation(
            priority='high', icon='🌙',
            message='Es de noche. Considera pedir un taxi o compartir tu ubicación con alguien de confianza.',
            action='Compartir Ubicación'
        ))
    if (risk_of('lighting') or 0) >= 2:
        recs.append(Recommendation(
            priority='medium', icon='💡',
            message='Poca iluminación. Busca rutas más iluminadas o espera en un lugar con luz '
                    'hasta que llegue tu transporte.',
            action='Ver Rutas Seguras'
        ))
    if (risk_of('people') or 0) >= 2:
        recs.append(Recommendation(
            priority='medium', icon='👥',
            message='Zona poco transitada. Dirígete a una zona más concurrida o activa el '
                    'temporizador de seguridad.',
            action='Temporizador'
        ))
    if (risk_of('transport') or 0) >= 2:
        recs.append(Recommendation(
            priority='high', icon='🚕',
            message='Transporte limitado. Busca paradas de bus, metro o Bicing cercanas, '
                    'o solicita un taxi verificado.',
            action='Ver Transporte'
        ))
    if percentage >= 50:
        recs.append(Recommendation(
            priority='high', icon='📞',
            message='Mantén contacto. Llama a alguien de confianza y mantén la conversación '
                    'mientras te desplazas.',
            action='Llamada Falsa'
        ))
    if percentage < 25:
        recs.append(Recommendation(
            priority='low', icon='✨',
            message='Todo bien. Sigue disfrutando de tu camino. Recuerda estar siempre atenta a tu entorno.',
            action=None
        ))
    return recs
