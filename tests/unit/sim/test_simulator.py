import stratified_tank as st
import numpy as np
import pytest


def test_simulation_config():
    cfg = st.SimulationConfig(ticks = 95, record_every = 10)
    assert cfg.record_count == 10
    with pytest.raises(st.InvalidConfiguration):
        st.SimulationConfig(ticks = 0)
    with pytest.raises(st.InvalidConfiguration):
        st.SimulationConfig(ticks = 10, record_every = 0)


def test_simulator_records_shell_temperatures():
    tank = st.ThermalTank(2, 1000)
    tank.set_target_temperature(0, 310).set_target_temperature(1, 290)
    results = st.Simulator(tank, st.SimulationConfig(ticks = 500)).run()
    df = results.to_dataframe()
    assert df.shape == (500, 6)
    assert df.index.name == 'tick'
    assert np.all(np.diff(df['tank_0:shell_temperature']) >= 0)
    assert np.all(np.diff(df['tank_1:shell_temperature']) <= 0)
    assert df['tank_0:shell_temperature'].iloc[-1] == 310
    assert df['tank_1:shell_temperature'].iloc[-1] == 290
    assert (df['tank_0:fluid_amount'] == 0).all()
    ticks = results.ticks_to_target(0)
    assert ticks is not None
    assert results.get_signal(0, 'shell_temperature')[ticks] == 310
    assert results.get_signal(0, 'shell_temperature')[ticks - 1] < 310


def test_simulator_with_driver(oil):
    def driver(tank, state):
        if state.tick == 0:
            tank.fill(st.FluidStack(st.WATER, 100), st.FluidAction.EXECUTE)
        if state.tick == 50:
            tank.set_target_temperature(0, 330)

    tank = st.ThermalTank(1, 1000)
    cfg = st.SimulationConfig(ticks = 200, record_every = 10, tracked_fluids = (st.WATER, oil))
    results = st.Simulator(tank, cfg, driver).run()
    df = results.to_dataframe()
    assert list(df.index) == list(range(0, 200, 10))
    assert (df['tank_0:fluid_amount'] == 100).all()
    assert df['tank_0:fluid:oil'].isna().all()
    assert df['tank_0:fluid:water'].notna().all()
    assert df.loc[40, 'tank_0:target_temperature'] == 300
    assert df.loc[50, 'tank_0:target_temperature'] == 330
    assert df['tank_0:fluid:water'].iloc[-1] > 300


def test_ticks_to_target_not_reached():
    tank = st.ThermalTank(1, 1000).set_target_temperature(0, 400)
    results = st.Simulator(tank, st.SimulationConfig(ticks = 3)).run()
    assert results.ticks_to_target(0) is None
