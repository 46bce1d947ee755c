"""Tests for the parameter models and scenario export.

These tests ensure that scenario serialisation round-trips, that the
derived durabilities follow the parameters and that invalid input is
rejected with a validation error.
"""

import json

import pytest
from pydantic import ValidationError

from cemodel.params import ModelParams, Scenario, Strategy
from cemodel.utils import axis, scenario_hash


def test_scenario_json_roundtrip():
    scn = Scenario(d1=0.6, d2=0.3, gamma=1.1, c=0.12, k=0.01, resolution=30)
    data = json.loads(scn.model_dump_json())
    scn2 = Scenario.model_validate_json(json.dumps(data))
    assert scn == scn2


def test_scenario_rejects_weak_above_strong():
    with pytest.raises(ValidationError):
        Scenario(d1=0.3, d2=0.3)


def test_scenario_bounds():
    with pytest.raises(ValidationError):
        Scenario(gamma=2.0)
    with pytest.raises(ValidationError):
        Scenario(resolution=1)
    with pytest.raises(ValidationError):
        Scenario(c=float("nan"))


def test_scenario_to_model_params():
    p = Scenario().to_model_params()
    assert (p.d1, p.d2, p.gamma, p.c, p.k) == (0.5, 0.2, 1.0, 0.15, 0.0)
    assert p.feasible


def test_model_params_frozen():
    p = ModelParams(d1=0.5, d2=0.2, c=0.1)
    with pytest.raises(ValidationError):
        p.c = 0.2


def test_model_params_derived_follow_fields():
    p = ModelParams(d1=0.5, d2=0.2, gamma=0.8, c=0.1)
    q = p.model_copy(update={"gamma": 1.2})
    assert p.d_sum_L == pytest.approx(0.56)
    assert q.d_sum_L == pytest.approx(0.84)


def test_model_params_domain():
    with pytest.raises(ValidationError):
        ModelParams(d1=1.0, d2=0.2, c=0.1)
    with pytest.raises(ValidationError):
        ModelParams(d1=0.5, d2=0.2, c=0.1, k=float("-inf"))
    assert not ModelParams(d1=0.2, d2=0.5, c=0.1).feasible


def test_strategy_order():
    assert [s.name for s in Strategy] == ["SI", "LI", "SM", "LM"]
    assert [int(s) for s in Strategy] == [0, 1, 2, 3]


def test_scenario_hash_stable():
    assert scenario_hash(Scenario()) == scenario_hash(Scenario())
    assert scenario_hash(Scenario()) != scenario_hash(Scenario(c=0.2))


def test_axis_endpoints():
    a = axis(0.01, 0.35, 5)
    assert a[0] == 0.01
    assert a[-1] == pytest.approx(0.35)
    with pytest.raises(ValueError):
        axis(0.0, 1.0, 1)
