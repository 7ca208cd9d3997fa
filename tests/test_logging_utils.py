import logging

import numpy as np
import pytest

from panelnet import build_topology, group_panels, build_panels
from panelnet.logging_utils import apply_debug_logging, debug_log_call, summarize


def test_summarize_shortens_arrays_and_lists():
    assert summarize(np.zeros(3)) == "ndarray(3,)=[0.,0.,0.]"
    assert summarize(np.arange(12.0).reshape(4, 3)).startswith("ndarray(4, 3)[min=0")
    assert summarize(list(range(10))).endswith("... (10 items)]")


def test_debug_log_call_traces_calls_and_errors(caplog):
    logger = logging.getLogger("panelnet.tests.trace")
    caplog.set_level(logging.DEBUG, logger="panelnet.tests.trace")

    @debug_log_call(logger)
    def divide(a, b):
        return a / b

    assert divide(6, 3) == 2
    with pytest.raises(ZeroDivisionError):
        divide(1, 0)

    messages = [record.getMessage() for record in caplog.records]
    assert any(message.startswith("-> ") and "divide" in message for message in messages)
    assert any(message.startswith("<- ") and "= 2" in message for message in messages)
    assert any("raised" in message for message in messages)


def test_apply_debug_logging_wraps_module_functions():
    namespace = {"__name__": "panelnet.tests.fake"}

    def helper():
        return 1

    helper.__module__ = "panelnet.tests.fake"
    namespace["helper"] = helper
    namespace["imported"] = len

    apply_debug_logging(namespace)

    assert namespace["helper"] is not helper
    assert namespace["helper"]() == 1
    assert namespace["imported"] is len


def test_engine_modules_trace_at_debug(collinear_lines, caplog):
    caplog.set_level(logging.DEBUG, logger="panelnet")
    topo = build_topology(collinear_lines, 0.01)
    panels, _, _ = build_panels(topo, [1.0], [1.0])

    group_panels(panels)

    messages = [record.getMessage() for record in caplog.records]
    assert any("-> line_perp" in message for message in messages)
    assert any("-> group_panels" in message for message in messages)
