from decimal import Decimal

import yaml
from hypothesis import given
from hypothesis import strategies as st

from jointable.util.decimal_yaml import DecimalDumper, to_decimal, to_yaml


def test_to_yaml():
    assert (
        to_yaml(Decimal("100000.30020320320000000000000000000000000000001"))
        == "--- 100000.30020320320000000000000000000000000000001\n"
    )
    assert to_yaml(Decimal("Infinity")) == "--- .Inf\n"
    assert to_yaml(Decimal("NaN")) == "--- .NaN\n"
    assert to_yaml(Decimal("-Infinity")) == "--- -.Inf\n"


def test_to_yaml_positional_notation():
    assert to_yaml(Decimal("1E+3")) == "--- 1000.0\n"
    assert to_yaml(Decimal("1E-8")) == "--- 0.00000001\n"


def test_nested_decimals():
    document = yaml.dump({"price": Decimal("9.99")}, Dumper=DecimalDumper)
    assert document == "price: 9.99\n"


def test_to_decimal():
    bd = Decimal("10")
    assert to_decimal(bd) is bd
    assert to_decimal(10) == bd
    assert to_decimal("0.1") == Decimal("0.1")


@given(
    st.decimals(
        min_value=-(10**12),
        max_value=10**12,
        allow_nan=False,
        allow_infinity=False,
    )
)
def test_finite_decimals_load_as_floats(value):
    assert yaml.safe_load(to_yaml(value)) == float(value)
