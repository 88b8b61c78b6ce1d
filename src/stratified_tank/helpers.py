import pandas as pd


def truncated_div(numerator: int, denominator: int) -> int:
    """
    Integer division rounding toward zero.
    -7 / 2 gives -3, where // gives -4.
    """
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator >= 0) == (denominator > 0) else -quotient


def read_fluid_table(path) -> pd.DataFrame:
    """
    Reads a table of fluid definitions from a .csv file
    Expected columns are name, density, temperature and conductivity. Only name and density are mandatory
    """
    data_df = pd.read_csv(path, sep = ';', decimal = '.', header = 0)
    missing = {'name', 'density'} - set(data_df.columns)
    if missing:
        raise InvalidConfiguration(f'Fluid table {path} is missing the column(s) {sorted(missing)}')
    return data_df


class TankError(Exception):
    pass

class InvalidConfiguration(TankError, ValueError):
    pass

class FluidNotPresent(TankError, KeyError):
    def __str__(self):
        # KeyError would otherwise repr() the message
        return str(self.args[0]) if self.args else ''
