"""
Тести для модуля api

Запуск: pytest tests/test_api.py -v
"""

import pytest


def _client(**config_sections):
    """Окремий додаток з власним сховищем для кожного тесту"""
    from fastapi.testclient import TestClient

    from dr_bayes.api import create_app, APIConfig
    from dr_bayes.config import DrBayesConfig
    from dr_bayes.hypothesis_store import HypothesisStore

    config = DrBayesConfig(**config_sections)
    app = create_app(config=config, api_config=APIConfig(), store=HypothesisStore(config=config))
    return TestClient(app)


def test_app_creation():
    """Тест створення FastAPI app"""
    from fastapi import FastAPI
    from dr_bayes.api import create_app

    app = create_app()

    assert isinstance(app, FastAPI)
    assert app.state.store is not None
    print(f"✓ FastAPI app created: {app.title}")


def test_root_and_health():
    """Кореневий endpoint та health check"""
    client = _client()

    root = client.get("/")
    assert root.status_code == 200
    assert root.json()["name"] == "Dr.Bayes API"

    health = client.get("/health")
    assert health.status_code == 200
    data = health.json()
    assert data["status"] == "ok"
    assert data["test_threshold"] == 0.05
    assert data["treatment_threshold"] == 0.90

    print(f"✓ Health: {data}")


# ============================================================
# Калькулятор
# ============================================================

def test_calculate():
    """0.30 × LR 10 → ≈ 0.8108"""
    client = _client()

    response = client.post("/api/bayes/calculate", json={
        "pretest_probability": 0.30,
        "likelihood_ratio": 10,
    })

    assert response.status_code == 200
    data = response.json()
    assert data["posttest_probability"] == pytest.approx(0.8108, abs=1e-4)
    assert data["pretest_odds"] == pytest.approx(0.4286, abs=1e-4)
    assert data["posttest_odds"] == pytest.approx(4.2857, abs=1e-4)

    print(f"✓ Calculate: {data}")


def test_decimal_strings_accepted():
    """Числа можуть приходити десятковими рядками"""
    client = _client()

    response = client.post("/api/bayes/calculate", json={
        "pretest_probability": "0.30",
        "likelihood_ratio": "10",
    })

    assert response.status_code == 200
    assert response.json()["posttest_probability"] == pytest.approx(0.8108, abs=1e-4)
    print("✓ Decimal strings")


def test_missing_field_is_400():
    """Відсутнє обов'язкове поле → 400 до будь-яких обчислень"""
    client = _client()

    for path, body in [
        ("/api/bayes/calculate", {"pretest_probability": 0.3}),
        ("/api/bayes/calculate-both", {"pretest_probability": 0.3, "lr_positive": 8.5}),
        ("/api/bayes/likelihood-ratios", {"sensitivity": 0.85}),
        ("/api/bayes/from-sens-spec", {"sensitivity": 0.85, "specificity": 0.9}),
        ("/api/bayes/recommend-tier", {}),
    ]:
        response = client.post(path, json=body)
        assert response.status_code == 400, path
        assert response.json()["error"] == "VALIDATION_ERROR"

    print("✓ Missing fields → 400")


def test_out_of_range_is_400():
    """Ймовірність поза [0, 1] та від'ємний LR → 400"""
    client = _client()

    bad_bodies = [
        {"pretest_probability": 1.5, "likelihood_ratio": 2},
        {"pretest_probability": -0.1, "likelihood_ratio": 2},
        {"pretest_probability": 0.3, "likelihood_ratio": -2},
        {"pretest_probability": "abc", "likelihood_ratio": 2},
    ]
    for body in bad_bodies:
        response = client.post("/api/bayes/calculate", json=body)
        assert response.status_code == 400, body

    print("✓ Out of range → 400")


def test_indeterminate_update_is_400():
    """p = 1 з LR = 0 → DOMAIN_ERROR"""
    client = _client()

    response = client.post("/api/bayes/calculate", json={
        "pretest_probability": 1.0,
        "likelihood_ratio": 0,
    })

    assert response.status_code == 400
    assert response.json()["error"] == "DOMAIN_ERROR"
    print(f"✓ {response.json()['message']}")


def test_infinite_odds_serialized():
    """+∞ у відповіді — рядок "Infinity" """
    client = _client()

    response = client.post("/api/bayes/calculate", json={
        "pretest_probability": 1.0,
        "likelihood_ratio": 2,
    })

    assert response.status_code == 200
    data = response.json()
    assert data["pretest_odds"] == "Infinity"
    assert data["posttest_odds"] == "Infinity"
    assert data["posttest_probability"] == 1.0

    print(f"✓ {data}")


def test_infinity_input_and_overflow():
    """LR "Infinity" — певний доказ; "1e400" — переповнення → 400"""
    client = _client()

    certain = client.post("/api/bayes/calculate", json={
        "pretest_probability": 0.2,
        "likelihood_ratio": "Infinity",
    })
    assert certain.status_code == 200
    data = certain.json()
    assert data["likelihood_ratio"] == "Infinity"
    assert data["posttest_odds"] == "Infinity"
    assert data["posttest_probability"] == 1.0

    for body in [
        {"pretest_probability": 0.3, "lr_positive": "1e400", "lr_negative": 0.5},
        {"pretest_probability": 0.3, "lr_positive": 10**400, "lr_negative": 0.5},
    ]:
        response = client.post("/api/bayes/calculate-both", json=body)
        assert response.status_code == 400
        assert response.json()["error"] == "VALIDATION_ERROR"
        assert "overflows" in response.json()["details"]["errors"][0]["msg"]

    print("✓ Infinity accepted, overflow rejected")


def test_likelihood_ratios():
    """sens 0.85 / spec 0.90 → LR+ 8.5, LR− ≈ 0.1667"""
    client = _client()

    response = client.post("/api/bayes/likelihood-ratios", json={
        "sensitivity": 0.85,
        "specificity": 0.90,
    })

    assert response.status_code == 200
    data = response.json()
    assert data["lr_positive"] == pytest.approx(8.5)
    assert data["lr_negative"] == pytest.approx(0.1667, abs=1e-4)
    assert data["lr_positive_interpretation"] == "moderate_increase"
    assert data["lr_negative_interpretation"] == "moderate_decrease"

    print(f"✓ {data}")


def test_likelihood_ratio_edges():
    """spec = 1 → "Infinity"; spec = 0 → 400"""
    client = _client()

    perfect = client.post("/api/bayes/likelihood-ratios", json={
        "sensitivity": 0.9,
        "specificity": 1.0,
    })
    assert perfect.status_code == 200
    assert perfect.json()["lr_positive"] == "Infinity"
    assert perfect.json()["lr_negative"] == pytest.approx(0.1)

    useless = client.post("/api/bayes/likelihood-ratios", json={
        "sensitivity": 1.0,
        "specificity": 0.0,
    })
    assert useless.status_code == 400
    assert useless.json()["details"]["parameter"] == "specificity"

    print("✓ LR edges")


def test_from_sens_spec():
    """План обох результатів"""
    client = _client()

    response = client.post("/api/bayes/from-sens-spec", json={
        "pretest_probability": 0.30,
        "sensitivity": 0.85,
        "specificity": 0.90,
    })

    assert response.status_code == 200
    data = response.json()
    assert data["posttest_if_positive"] == pytest.approx(0.7846, abs=1e-4)
    assert data["posttest_if_negative"] == pytest.approx(0.0667, abs=1e-4)
    assert data["diagnostic_value"] == "high"
    assert data["changes_management"] is False

    print(f"✓ {data}")


def test_calculate_both():
    """План обох результатів з готовими LR"""
    client = _client()

    response = client.post("/api/bayes/calculate-both", json={
        "pretest_probability": 0.5,
        "lr_positive": 10,
        "lr_negative": 0.5,
    })

    assert response.status_code == 200
    data = response.json()
    assert data["posttest_if_positive"] == pytest.approx(0.9091, abs=1e-4)
    assert data["if_positive"]["pretest_odds"] == pytest.approx(1.0)
    assert data["if_positive"]["posttest_odds"] == pytest.approx(10.0)
    assert data["if_negative"]["posttest_odds"] == pytest.approx(0.5)
    assert data["if_negative"]["posttest_probability"] == data["posttest_if_negative"]
    assert data["changes_management"] is True

    print(f"✓ {data}")


def test_recommend_tier():
    """0.02 / 0.5 / 0.95"""
    client = _client()

    expected = {0.02: "no_action", 0.5: "order_test", 0.95: "treat_empirically"}
    for probability, tier in expected.items():
        response = client.post("/api/bayes/recommend-tier", json={"current_probability": probability})
        assert response.status_code == 200
        assert response.json()["tier"] == tier

    print("✓ Tiers")


def test_recommend_tier_uses_configured_thresholds():
    """Пороги з конфігурації додатку"""
    from dr_bayes.config import ThresholdConfig

    client = _client(thresholds=ThresholdConfig(test_threshold=0.1, treatment_threshold=0.6))

    response = client.post("/api/bayes/recommend-tier", json={"current_probability": 0.7})

    assert response.json()["tier"] == "treat_empirically"
    assert response.json()["treatment_threshold"] == 0.6
    print("✓ Configured thresholds")


def test_test_rationale():
    """Обґрунтування тесту з sens/spec або з LR"""
    client = _client()

    response = client.post("/api/bayes/test-rationale", json={
        "hypothesis_name": "Hypothyroidism",
        "test_name": "TSH",
        "pretest_probability": 0.30,
        "sensitivity": 0.85,
        "specificity": 0.90,
    })

    assert response.status_code == 200
    data = response.json()
    assert data["rationale"].startswith("Testing for Hypothyroidism with TSH:")
    assert data["plan"]["posttest_if_positive"] == pytest.approx(0.7846, abs=1e-4)

    without_test_data = client.post("/api/bayes/test-rationale", json={
        "hypothesis_name": "Hypothyroidism",
        "test_name": "TSH",
        "pretest_probability": 0.30,
    })
    assert without_test_data.status_code == 400
    assert without_test_data.json()["error"] == "DOMAIN_ERROR"

    print(data["rationale"])


# ============================================================
# Гіпотези
# ============================================================

def test_hypothesis_workflow():
    """Пропозиція → доказ → ранжування → рекомендація → виключення"""
    client = _client()

    thyroid = client.post("/api/problems/fatigue/hypotheses", json={
        "diagnosis_id": "E03.9",
        "pretest_probability": 0.25,
        "diagnosis_name": "Hypothyroidism",
    })
    anemia = client.post("/api/problems/fatigue/hypotheses", json={
        "diagnosis_id": "D50.9",
        "pretest_probability": 0.40,
    })
    assert thyroid.status_code == 201
    assert anemia.status_code == 201
    thyroid_id = thyroid.json()["hypothesis_id"]
    anemia_id = anemia.json()["hypothesis_id"]

    ranked = client.get("/api/problems/fatigue/hypotheses").json()
    assert [h["diagnosis_id"] for h in ranked["hypotheses"]] == ["D50.9", "E03.9"]

    evidence = client.post(f"/api/problems/fatigue/hypotheses/{thyroid_id}/evidence", json={
        "likelihood_ratio": 10,
        "finding": "TSH elevated",
    })
    assert evidence.status_code == 200
    assert evidence.json()["rank"] == 1
    assert evidence.json()["supporting_findings"] == ["TSH elevated"]
    assert evidence.json()["evidence"][0]["likelihood_ratio"] == 10

    recommendation = client.get(f"/api/problems/fatigue/hypotheses/{thyroid_id}/recommendation")
    assert recommendation.status_code == 200
    assert recommendation.json()["tier"] == "order_test"

    retired = client.post(f"/api/hypotheses/{anemia_id}/retire", json={"outcome": "ruled_out"})
    assert retired.status_code == 200
    assert retired.json()["status"] == "ruled_out"
    assert retired.json()["rank"] is None

    ranked = client.get("/api/problems/fatigue/hypotheses").json()
    assert ranked["total"] == 1
    assert ranked["hypotheses"][0]["hypothesis_id"] == thyroid_id

    print(f"✓ Workflow: {ranked}")


def test_batch_and_test_result():
    """Кілька кандидатів та результат тесту"""
    client = _client()

    created = client.post("/api/problems/sore-throat/hypotheses/batch", json={
        "candidates": [
            {"diagnosis_id": "strep", "pretest_probability": 0.30},
            {"diagnosis_id": "viral"},
        ]
    })
    assert created.status_code == 201
    strep, viral = created.json()
    assert viral["pretest_probability"] == 0.15

    result = client.post(f"/api/problems/sore-throat/hypotheses/{strep['hypothesis_id']}/test-result", json={
        "sensitivity": 0.85,
        "specificity": 0.90,
        "positive": True,
        "test_name": "Rapid strep",
    })
    assert result.status_code == 200
    assert result.json()["current_probability"] == pytest.approx(0.7846, abs=1e-4)

    fetched = client.get(f"/api/hypotheses/{strep['hypothesis_id']}")
    assert fetched.json()["supporting_findings"] == ["Rapid strep positive"]

    print("✓ Batch + test result")


def test_hypothesis_errors():
    """404 / 409 / 400 для сховища"""
    client = _client()

    assert client.get("/api/problems/unknown/hypotheses").status_code == 404
    assert client.post("/api/hypotheses/nope/retire", json={"outcome": "confirmed"}).status_code == 404

    created = client.post("/api/problems/p1/hypotheses", json={
        "diagnosis_id": "dx",
        "pretest_probability": 0.2,
    }).json()
    hid = created["hypothesis_id"]

    duplicate = client.post("/api/problems/p1/hypotheses", json={
        "diagnosis_id": "dx",
        "pretest_probability": 0.3,
    })
    assert duplicate.status_code == 409

    assert client.post(f"/api/hypotheses/{hid}/retire", json={"outcome": "maybe"}).status_code == 400
    assert client.post(f"/api/hypotheses/{hid}/retire", json={"outcome": "confirmed"}).status_code == 200

    again = client.post(f"/api/hypotheses/{hid}/retire", json={"outcome": "ruled_out"})
    assert again.status_code == 409
    assert again.json()["error"] == "INVALID_STATE"

    evidence = client.post(f"/api/problems/p1/hypotheses/{hid}/evidence", json={"likelihood_ratio": 2})
    assert evidence.status_code == 409

    missing_lr = client.post(f"/api/problems/p1/hypotheses/{hid}/evidence", json={"finding": "x"})
    assert missing_lr.status_code == 400

    print("✓ Hypothesis errors")


def test_unknown_problems_leave_no_locks():
    """404 для неіснуючої проблеми не залишає стану в сховищі"""
    client = _client()
    store = client.app.state.store

    for i in range(50):
        assert client.get(f"/api/problems/unknown-{i}/hypotheses").status_code == 404
    response = client.get("/api/problems/unknown/hypotheses/nope/recommendation")
    assert response.status_code == 404
    response = client.post(
        "/api/problems/unknown/hypotheses/nope/evidence", json={"likelihood_ratio": 2}
    )
    assert response.status_code == 404

    assert len(store._problem_locks) == 0

    print("✓ No locks for unknown problems")


def test_apps_do_not_share_state():
    """Кожен додаток має власне сховище"""
    first = _client()
    second = _client()

    first.post("/api/problems/p1/hypotheses", json={"diagnosis_id": "dx", "pretest_probability": 0.2})

    assert first.get("/api/problems/p1/hypotheses").status_code == 200
    assert second.get("/api/problems/p1/hypotheses").status_code == 404

    print("✓ Isolated stores")
