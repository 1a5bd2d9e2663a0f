import numpy as np
import pytest

from gravstep import (
    Body,
    Diagnostics,
    InvalidMass,
    InvalidState,
    NBodySimulation,
    SimConfig,
    SingularConfiguration,
    TrajectoryRecorder,
    reference_bodies,
)


def test_reference_step_zero_is_initial_state():
    sim = NBodySimulation(reference_bodies())
    first = next(sim.steps(1))
    assert first.step_index == 0
    assert first.simulated_time == 0.0
    assert first.body(0).position == (0.3089693008, 0.4236727692)
    assert first.body(1).position == (-0.5, 0.0)
    assert first.body(2).position == (0.5, 0.0)


def test_defaults_match_reference_constants():
    sim = NBodySimulation(reference_bodies())
    assert sim.G == 6.67430e-11
    assert sim.dt == 0.5
    assert sim.cfg.n_steps == 100_000


def test_advance_replaces_current_step():
    sim = NBodySimulation(reference_bodies())
    before = sim.current
    after = sim.advance()
    assert after is sim.current
    assert after is not before
    assert before.step_index == 0
    assert after.step_index == 1
    sim.advance()
    assert sim.step_index == 2
    assert sim.simulated_time == 1.0


def test_steps_sequence_is_lazy_and_sequential():
    sim = NBodySimulation(reference_bodies())
    produced = list(sim.steps(5))
    assert [s.step_index for s in produced] == [0, 1, 2, 3, 4]
    assert sim.step_index == 5


def test_breaking_out_needs_no_cleanup():
    sim = NBodySimulation(reference_bodies())
    for st in sim.steps(1000):
        if st.step_index == 2:
            break
    assert sim.step_index == 2
    assert [s.step_index for s in sim.steps(2)] == [2, 3]


def test_record_retains_full_history():
    sim = NBodySimulation(reference_bodies(), SimConfig(G=1.0, dt=1e-3))
    history = sim.record(50)
    assert len(history) == 50
    assert history[0].step_index == 0
    assert not np.array_equal(history[0].pos, history[-1].pos)


def test_record_warns_for_large_history(capsys):
    sim = NBodySimulation(reference_bodies(), SimConfig(history_warn_steps=3))
    sim.record(4)
    assert "[warning]" in capsys.readouterr().out


def test_reset_returns_to_initial_conditions():
    sim = NBodySimulation(reference_bodies())
    sim.advance()
    sim.reset()
    assert sim.current is sim.initial


def test_identical_simulations_agree_bit_for_bit():
    cfg = SimConfig(G=1.0, dt=1e-3)
    a = NBodySimulation(reference_bodies(), cfg).record(200)
    b = NBodySimulation(reference_bodies(), cfg).record(200)
    for sa, sb in zip(a, b):
        assert np.array_equal(sa.pos, sb.pos)
        assert np.array_equal(sa.vel, sb.vel)


def test_independent_configurations():
    slow = NBodySimulation(reference_bodies(), SimConfig(G=1.0, dt=1e-3))
    fast = NBodySimulation(reference_bodies(), SimConfig(G=2.0, dt=1e-3))
    slow.advance()
    fast.advance()
    np.testing.assert_allclose(fast.current.vel, 2.0 * slow.current.vel, rtol=1e-12)


def test_arrays_constructor():
    sim = NBodySimulation(masses=[1.0, 2.0], positions=[(0.0, 0.0), (1.0, 0.0)])
    assert sim.n_bodies == 2
    assert np.all(sim.current.vel == 0.0)
    assert sim.bodies[1].mass == 2.0


def test_rejects_non_positive_mass(capsys):
    with pytest.raises(InvalidMass) as exc_info:
        NBodySimulation(masses=[1.0, -2.0], positions=[(0.0, 0.0), (1.0, 0.0)])
    assert exc_info.value.index == 1
    assert "[invalid] initial conditions" in capsys.readouterr().out


def test_rejects_empty_system():
    with pytest.raises(InvalidState):
        NBodySimulation([], SimConfig(diag_prints=False))


def test_singular_step_is_not_committed():
    sim = NBodySimulation([Body.at((0.0, 0.0)), Body.at((0.0, 0.0))])
    with pytest.raises(SingularConfiguration):
        sim.advance()
    assert sim.step_index == 0


def test_min_separation_keeps_running():
    cfg = SimConfig(G=1.0, dt=1e-3, min_separation=1e-3, diag_prints=False)
    sim = NBodySimulation([Body.at((0.0, 0.0)), Body.at((0.0, 0.0)), Body.at((1.0, 0.0))], cfg)
    last = sim.run([], n_steps=10)
    assert last.step_index == 9
    assert np.all(np.isfinite(sim.current.pos))


def test_run_aborts_by_default():
    sim = NBodySimulation([Body.at((0.0, 0.0)), Body.at((0.0, 0.0))])
    recorder = TrajectoryRecorder()
    with pytest.raises(SingularConfiguration):
        sim.run([recorder], n_steps=5)
    assert len(recorder) == 1


def test_run_can_stop_on_error(capsys):
    cfg = SimConfig(on_error="stop")
    sim = NBodySimulation([Body.at((0.0, 0.0)), Body.at((0.0, 0.0))], cfg)
    last = sim.run([], n_steps=5)
    assert last.step_index == 0
    assert "[error]" in capsys.readouterr().out


def test_center_of_mass_frame():
    cfg = SimConfig(G=1.0, dt=1e-3, center_of_mass_frame=True)
    sim = NBodySimulation([Body(1.0, 0.0, 0.0, 1.0, 0.0), Body(3.0, 1.0, 0.0, 1.0, 2.0)], cfg)
    px, py = Diagnostics(sim.current, cfg.G).linear_momentum()
    assert px == pytest.approx(0.0, abs=1e-15)
    assert py == pytest.approx(0.0, abs=1e-15)


def test_momentum_drift_stays_small(orbiting_bodies):
    sim = NBodySimulation(orbiting_bodies, SimConfig(G=1.0, dt=1e-3))
    drifts = []
    for chunk in range(4):
        drifts.append(Diagnostics.momentum_drift(sim.steps(1000)))
    assert max(drifts) < 1e-10


def test_zero_gravity_still_rejects_coincident_bodies():
    sim = NBodySimulation([Body.at((0.0, 0.0)), Body.at((0.0, 0.0))], SimConfig(G=0.0))
    with pytest.raises(SingularConfiguration):
        sim.advance()
    assert sim.step_index == 0


def test_center_of_mass_frame_keeps_relative_velocities():
    cfg = SimConfig(G=1.0, dt=1e-3, center_of_mass_frame=True)
    sim = NBodySimulation([Body(1.0, 0.0, 0.0, 2.0, 0.0), Body(1.0, 1.0, 0.0, 0.0, 4.0)], cfg)
    np.testing.assert_allclose(sim.current.vel, [[1.0, -2.0], [-1.0, 2.0]])


def test_center_of_mass_frame_stops_a_lone_body():
    cfg = SimConfig(center_of_mass_frame=True)
    sim = NBodySimulation([Body(2.0, 1.0, 1.0, 3.0, -1.0)], cfg)
    assert np.all(sim.current.vel == 0.0)
