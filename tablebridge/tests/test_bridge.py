import re
from unittest.mock import patch

import pandas as pd
import pytest

import tablebridge as tb
from tablebridge.bridge import PYARROW_ERR_MSG, ArrowBridge, Bridge
from tablebridge.config import config
from tablebridge.exceptions import RuntimeUnavailableError


def test_base_bridge_is_unavailable(sample_table):
    bridge = Bridge()
    assert not bridge.is_available()
    with pytest.raises(RuntimeUnavailableError, match='Bridge is not available'):
        bridge.to_foreign(sample_table)


def test_disabled_arrow_bridge(sample_table):
    bridge = ArrowBridge(enabled=False)
    assert not bridge.is_available()
    df = tb.native_to_foreign(sample_table, bridge=bridge)
    assert list(df.columns) == ['x', 'y', 'z']


@patch("tablebridge.bridge.import_or_none", return_value=None)
def test_arrow_bridge_without_pyarrow(mock_import, sample_table):
    bridge = ArrowBridge()
    assert not bridge.is_available()
    with pytest.raises(RuntimeUnavailableError, match=re.escape(PYARROW_ERR_MSG)):
        bridge.to_foreign(sample_table)

    df = tb.native_to_foreign(sample_table, bridge=bridge)
    pd.testing.assert_frame_equal(df, tb.native_to_foreign(sample_table))


@pytest.mark.parametrize('fixture', ['sample_table', 'all_types_table', 'keyed_table'])
def test_arrow_bridge_matches_core_path(fixture, request):
    pytest.importorskip('pyarrow', reason='pyarrow not installed')
    table = request.getfixturevalue(fixture)
    bridge = ArrowBridge()
    assert bridge.is_available()

    bridged = tb.native_to_foreign(table, bridge=bridge)
    expected = tb.native_to_foreign(table)
    pd.testing.assert_frame_equal(bridged, expected)
    assert bridged.attrs == expected.attrs
    assert tb.foreign_to_native(bridged) == table


def test_arrow_bridge_respects_symbol_option(sample_table):
    pytest.importorskip('pyarrow', reason='pyarrow not installed')
    with config.with_options(symbols_as_categorical=False):
        df = tb.native_to_foreign(sample_table, bridge=ArrowBridge())
    assert df['y'].dtype == object
