# tests/conftest.py
import numpy as np
import pytest
import stratified_tank as st

@pytest.fixture
def rng():
    return np.random.default_rng(42)

@pytest.fixture
def heavy():
    return st.Fluid('heavy', density = 10)

@pytest.fixture
def light():
    return st.Fluid('light', density = 5)

@pytest.fixture
def oil():
    return st.Fluid('oil', density = 800, temperature = 300)

@pytest.fixture
def fluid_table(tmp_path):
    path = tmp_path / "fluids.csv"
    path.write_text("name;density;temperature;conductivity\n"
                    "water;1000;300;1.0\n"
                    "lava;3000;1300;2.5\n"
                    "oil;800;300;0.5\n")
    return path
