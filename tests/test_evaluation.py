import pytest

from camina_segura.algorithms.evaluation import calculate_risk, evaluation_recommendations

LOW_RISK = {'time': 'day', 'people': 'crowded', 'lighting': 'bright',
            'area': 'commercial', 'feeling': 'safe', 'transport': 'yes-near'}
HIGH_RISK = {'time': 'night', 'people': 'alone', 'lighting': 'dark',
             'area': 'isolated', 'feeling': 'unsafe', 'transport': 'no'}


def _icons(assessment):
    return [rec.icon for rec in evaluation_recommendations(assessment.responses, assessment.percentage)]


def test_all_safe_answers():
    assessment = calculate_risk(LOW_RISK)
    assert assessment.percentage == 0
    assert assessment.level == 'Seguro'
    assert _icons(assessment) == ['✨']


def test_all_risky_answers():
    assessment = calculate_risk(HIGH_RISK)
    assert assessment.percentage == 100
    assert assessment.level == 'Alto Riesgo'
    assert _icons(assessment) == ['🚨', '🌙', '💡', '👥', '🚕', '📞']


def test_mixed_night_walk():
    answers = {'time': 'night', 'people': 'few', 'lighting': 'dim',
               'area': 'residential', 'feeling': 'alert', 'transport': 'far'}
    assessment = calculate_risk(answers)

    assert assessment.percentage == pytest.approx(61.11, abs=0.01)
    assert assessment.level == 'Riesgo Moderado'
    assert _icons(assessment) == ['🌙', '💡', '👥', '🚕', '📞']


@pytest.mark.parametrize("answers,level", [
    ({'time': 'night', 'people': 'alone', 'lighting': 'dark'}, 'Riesgo Moderado'),  # exactly 50%
    ({'time': 'night', 'people': 'few'}, 'Precaución'),  # 27.8%
    ({'time': 'evening', 'people': 'moderate'}, 'Seguro'),  # 11.1%
])
def test_level_boundaries(answers, level):
    assert calculate_risk(answers).level == level


def test_explicit_risk_mapping():
    assessment = calculate_risk({'feeling': {'value': 'custom', 'risk': 3}})
    assert assessment.responses['feeling'] == {'value': 'custom', 'risk': 3}
    assert '🚨' in _icons(assessment)


@pytest.mark.parametrize("answers", [
    {'weather': 'rain'},
    {'time': 'midnight'},
    {'time': {'value': 'day', 'risk': 7}},
    {'time': {'value': 'day', 'risk': True}},
    {'time': ['night']},
    {'time': {'value': ['x']}},
    {'people': 2},
])
def test_invalid_answers(answers):
    with pytest.raises(ValueError):
        calculate_risk(answers)
