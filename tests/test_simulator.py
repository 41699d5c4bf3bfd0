import importlib.util
from pathlib import Path

SCRIPT = Path(__file__).resolve().parent.parent / "scripts" / "simulate_sensor.py"


def _load_simulator():
    spec = importlib.util.spec_from_file_location("simulate_sensor", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_simulated_readings_are_accepted(client, count_rows):
    sim = _load_simulator()
    for pot_id, location in sim.POTS:
        body = sim.make_reading(pot_id, location)
        assert 0.0 <= body["moisture_percent"] <= 100.0
        resp = client.post("/api/moisture", json=body)
        assert resp.status_code == 201, resp.text
    assert count_rows() == len(sim.POTS)
    assert client.get("/api/pots/latest").json()["count"] == len(sim.POTS)
