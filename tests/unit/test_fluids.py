import stratified_tank as st
import pytest


def test_fluid_identity_is_name():
    assert st.Fluid('water', density = 1) == st.WATER
    assert hash(st.Fluid('water', density = 1)) == hash(st.WATER)
    assert st.Fluid('water', density = 1000) != st.LAVA
    assert str(st.LAVA) == 'lava'


def test_fluid_stack():
    stack = st.FluidStack(st.WATER, 100)
    copy = stack.copy()
    copy.shrink(40)
    assert stack.amount == 100
    assert copy.amount == 60
    assert stack.copy(5) == st.FluidStack(st.WATER, 5)
    copy.grow(1)
    assert copy.amount == 61
    assert stack.is_fluid_equal(copy)
    assert st.FluidStack.empty().is_empty()
    assert st.FluidStack(st.WATER, 0).is_empty()


def test_registry_from_table(fluid_table):
    registry = st.FluidRegistry.from_table(fluid_table)
    assert len(registry) == 3
    assert 'lava' in registry
    lava = registry.get('lava')
    assert lava == st.LAVA
    assert lava.density == 3000
    assert lava.temperature == 1300
    assert lava.conductivity == 2.5
    assert [fluid.name for fluid in registry] == ['water', 'lava', 'oil']


def test_registry_table_with_only_mandatory_columns(tmp_path):
    path = tmp_path / "fluids.csv"
    path.write_text("name;density\nbrine;1200\n")
    brine = st.FluidRegistry.from_table(path).get('brine')
    assert brine.temperature == 300
    assert brine.conductivity == 1.0


def test_registry_errors(tmp_path):
    registry = st.FluidRegistry([st.WATER])
    with pytest.raises(st.InvalidConfiguration):
        registry.register(st.Fluid('water', density = 999))
    path = tmp_path / "fluids.csv"
    path.write_text("name;temperature\nbrine;300\n")
    with pytest.raises(st.InvalidConfiguration):
        st.FluidRegistry.from_table(path)
