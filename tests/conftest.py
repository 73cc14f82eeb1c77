"""Pytest configuration for bpmn-sim tests."""

import logging
import sys
from pathlib import Path

import pytest
from loguru import logger

# Add the project root to the path
project_dir = Path(__file__).parent.parent
sys.path.insert(0, str(project_dir))

from bpmn_sim.stages.xml_reader import DiagramElement  # noqa: E402

BPMN_HEADER = (
    '<?xml version="1.0" encoding="UTF-8"?>\n'
    '<bpmn:definitions xmlns:bpmn="http://www.omg.org/spec/BPMN/20100524/MODEL" '
    'xmlns:bpmndi="http://www.omg.org/spec/BPMN/20100524/DI" '
    'xmlns:di="http://www.omg.org/spec/DD/20100524/DI" '
    'xmlns:dc="http://www.omg.org/spec/DD/20100524/DC" '
    'xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance" '
    'id="Definitions_1" targetNamespace="http://bpmn.io/schema/bpmn">\n'
    '<bpmn:process id="Process_1" isExecutable="false">\n'
)
BPMN_FOOTER = "</bpmn:process>\n</bpmn:definitions>\n"


def bpmn_document(body: str) -> str:
    """Wrap process children in a BPMN definitions document."""
    return BPMN_HEADER + body + BPMN_FOOTER


def element(kind: str, **attributes: str) -> DiagramElement:
    """Create a flattened diagram element; ``None`` values are dropped."""
    return DiagramElement(kind=kind, attributes={k: v for k, v in attributes.items() if v is not None})


def flow(flow_id: str, source: str, target: str, name: str = None) -> DiagramElement:
    return element("sequenceFlow", id=flow_id, sourceRef=source, targetRef=target, name=name)


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo logging changes made by CLI invocations."""
    handlers = list(logging.root.handlers)
    level = logging.root.level
    yield
    logger.remove()
    logging.root.handlers[:] = handlers
    logging.root.setLevel(level)


# ===========================
# Diagram fixtures
# ===========================


@pytest.fixture
def end_event_only_xml():
    return bpmn_document('<bpmn:endEvent id="EndEvent_03ygbas" />\n')


@pytest.fixture
def start_event_only_xml():
    return bpmn_document('<bpmn:startEvent id="StartEvent_1"/>\n')


@pytest.fixture
def start_and_end_event_only_xml():
    return bpmn_document(
        '<bpmn:startEvent id="StartEvent_1"/>\n'
        '<bpmn:endEvent id="EndEvent_08j1b1p"/>\n'
    )


@pytest.fixture
def simple_xml():
    """Start event connected straight to an end event."""
    return bpmn_document(
        """
        <bpmn:startEvent id="StartEvent_1">
          <bpmn:outgoing>SequenceFlow_12x5xl1</bpmn:outgoing>
        </bpmn:startEvent>
        <bpmn:endEvent id="EndEvent_03ygbas">
          <bpmn:incoming>SequenceFlow_12x5xl1</bpmn:incoming>
        </bpmn:endEvent>
        <bpmn:sequenceFlow id="SequenceFlow_12x5xl1" sourceRef="StartEvent_1" targetRef="EndEvent_03ygbas" />
        """
    )


def gateway_body(fail_label: str = "fail:{percentage: 30}", success_label: str = "success:{percentage: 70}") -> str:
    """Gateway branching through two tasks to two end events.

    The gateway appears before its outgoing flows, which come last.
    """
    return f"""
        <bpmn:startEvent id="StartEvent_1">
          <bpmn:outgoing>SequenceFlow_10rse3m</bpmn:outgoing>
        </bpmn:startEvent>
        <bpmn:exclusiveGateway id="ExclusiveGateway_0vpr7ey" name="failure?">
          <bpmn:incoming>SequenceFlow_10rse3m</bpmn:incoming>
          <bpmn:outgoing>SequenceFlow_0etj4b6</bpmn:outgoing>
          <bpmn:outgoing>SequenceFlow_0ixuqui</bpmn:outgoing>
        </bpmn:exclusiveGateway>
        <bpmn:sequenceFlow id="SequenceFlow_10rse3m" sourceRef="StartEvent_1" targetRef="ExclusiveGateway_0vpr7ey"/>
        <bpmn:task id="Task_1vdx3tv" name="Handle failure:{{role:nurse;length:5}}">
          <bpmn:incoming>SequenceFlow_0etj4b6</bpmn:incoming>
          <bpmn:outgoing>SequenceFlow_0j3bjz3</bpmn:outgoing>
        </bpmn:task>
        <bpmn:endEvent id="EndEvent_1hg5lpm" name="Bad end">
          <bpmn:incoming>SequenceFlow_0j3bjz3</bpmn:incoming>
        </bpmn:endEvent>
        <bpmn:sequenceFlow id="SequenceFlow_0j3bjz3" sourceRef="Task_1vdx3tv" targetRef="EndEvent_1hg5lpm"/>
        <bpmn:task id="Task_0a1r5dv" name="Handle success:{{role:doctor;length:10}}">
          <bpmn:incoming>SequenceFlow_0ixuqui</bpmn:incoming>
          <bpmn:outgoing>SequenceFlow_0m2lrfh</bpmn:outgoing>
        </bpmn:task>
        <bpmn:endEvent id="EndEvent_053m21u" name="Good end">
          <bpmn:incoming>SequenceFlow_0m2lrfh</bpmn:incoming>
        </bpmn:endEvent>
        <bpmn:sequenceFlow id="SequenceFlow_0m2lrfh" sourceRef="Task_0a1r5dv" targetRef="EndEvent_053m21u"/>
        <bpmn:sequenceFlow id="SequenceFlow_0etj4b6" name="{fail_label}" sourceRef="ExclusiveGateway_0vpr7ey" targetRef="Task_1vdx3tv"/>
        <bpmn:sequenceFlow id="SequenceFlow_0ixuqui" name="{success_label}" sourceRef="ExclusiveGateway_0vpr7ey" targetRef="Task_0a1r5dv"/>
        """


@pytest.fixture
def gateway_xml():
    return bpmn_document(gateway_body())


@pytest.fixture
def gateway_elements():
    """The gateway diagram as already-flattened elements."""
    return [
        element("startEvent", id="start"),
        element("exclusiveGateway", id="gw", name="failure?"),
        flow("f1", "start", "gw"),
        element("task", id="task_fail", name="Handle failure:{role:nurse;length:5}"),
        element("endEvent", id="end_bad", name="Bad end"),
        flow("f2", "task_fail", "end_bad"),
        element("task", id="task_ok", name="Handle success:{role:doctor;length:10}"),
        element("endEvent", id="end_good", name="Good end"),
        flow("f3", "task_ok", "end_good"),
        flow("f4", "gw", "task_fail", name="fail:{percentage: 30}"),
        flow("f5", "gw", "task_ok", name="success:{percentage: 70}"),
    ]
