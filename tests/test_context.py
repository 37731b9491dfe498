# -*- coding: utf-8 -*-
from __future__ import annotations

import pytest

from pandas_ta_series import series_ta as sta
from pandas_ta_series.runtime import RuntimeContext, Series


def test_register_plot_is_idempotent_per_key(five_bars):
    ctx = RuntimeContext(five_bars)
    close = Series.from_field(five_bars, "close")
    ctx.register_plot("close", close, color="red")
    ctx.register_plot("close", close * 2, color="blue")
    ctx.register_hline("zero", 0)
    ctx.register_hline("zero", 1)
    assert len(ctx.plots) == 1
    assert ctx.plots[0].options == {"color": "blue"}
    assert [h.price for h in ctx.hlines] == [1.0]


def test_inputs_survive_reset(five_bars):
    ctx = RuntimeContext(five_bars)
    assert ctx.register_input("length", 14) == 14
    ctx.set_input_values({"length": 20})
    ctx.register_plot("p", Series.from_field(five_bars, "close"))
    ctx.reset()
    assert ctx.plots == []
    assert ctx.register_input("length", 14) == 20
    assert ctx.input_value("length") == 20
    assert ctx.input_value("missing", 3) == 3


def test_changed_default_warns_and_keeps_override():
    ctx = RuntimeContext()
    ctx.register_input("length", 14)
    with pytest.warns(UserWarning):
        assert ctx.register_input("length", 10) == 10
    ctx.set_input_values({"length": 30})
    with pytest.warns(UserWarning):
        assert ctx.register_input("length", 12) == 30


def test_override_before_declaration():
    ctx = RuntimeContext()
    ctx.set_input_values({"mult": 3.0})
    assert ctx.register_input("mult", 3.0) == 3.0
    assert ctx.inputs == {"mult": 3.0}


def test_plot_frame(five_bars):
    with RuntimeContext(five_bars) as ctx:
        ctx.register_indicator("Demo", overlay=True)
        close = Series.from_field(five_bars, "close")
        ctx.register_plot("sma", sta.sma(close, 3))
        frame = ctx.plot_frame()
        assert frame.columns.tolist() == ["sma"]
        assert frame.index.name == "time"
        assert frame["sma"].iloc[-1] == pytest.approx(4.0)
        assert ctx.indicator["title"] == "Demo"


def test_disposed_context_rejects_registration(five_bars):
    ctx = RuntimeContext(five_bars)
    ctx.register_input("length", 14)
    ctx.dispose()
    assert ctx.inputs == {}
    assert ctx.bar_data is None
    with pytest.raises(RuntimeError):
        ctx.register_plot("p", Series.from_field(five_bars, "close"))


def test_independent_contexts(five_bars):
    a, b = RuntimeContext(five_bars), RuntimeContext(five_bars)
    a.register_input("length", 1)
    b.register_input("length", 2)
    assert a.input_value("length") == 1
    assert b.input_value("length") == 2
