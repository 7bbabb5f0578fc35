"""
Shared fixtures: a small Jeedom ``jeeObject::full`` graph.
"""

from typing import Any, Dict, List

import pytest


def make_cmd(cmd_id: Any, generic_type: str, state: Any = None, **extra: Any) -> Dict[str, Any]:
    return {"id": cmd_id, "generic_type": generic_type, "state": state, **extra}


def make_equipment(
    eq_id: Any,
    name: str,
    object_id: Any,
    cmds: List[Dict[str, Any]],
    eq_type: str = "virtual",
) -> Dict[str, Any]:
    return {
        "id": eq_id,
        "name": name,
        "object_id": object_id,
        "eqType_name": eq_type,
        "cmds": cmds,
    }


def make_object(obj_id: Any, name: str, father_id: Any = None, eq_logics: List[Dict[str, Any]] | None = None) -> Dict[str, Any]:
    return {"id": obj_id, "name": name, "father_id": father_id, "eqLogics": eq_logics or []}


@pytest.fixture
def object_graph() -> List[Dict[str, Any]]:
    return [
        make_object("1", "Maison"),
        make_object("2", "Salon", father_id="1", eq_logics=[
            make_equipment("4", "Lampe Salon", "2", [
                make_cmd("101", "LIGHT_ON"),
                make_cmd("102", "LIGHT_STATE", state=1),
                make_cmd("103", "LIGHT_OFF"),
            ]),
            make_equipment("5", "Volet Salon", "2", [
                make_cmd("201", "FLAP_STATE", state="opened"),
                make_cmd("202", "FLAP_OPEN"),
                make_cmd("203", "FLAP_CLOSE"),
                make_cmd("204", "FLAP_STOP"),
            ]),
            # Real Z-Wave module: never exposed even with a LIGHT_STATE
            make_equipment("6", "Module Z-Wave", "2", [
                make_cmd("301", "LIGHT_STATE", state=1),
                make_cmd("302", "LIGHT_ON"),
            ], eq_type="zwavejs"),
        ]),
        make_object("3", "Chambre", father_id="1", eq_logics=[
            make_equipment("7", "Lampe Chambre", "3", [
                make_cmd("401", "LIGHT_STATE", state=0),
                make_cmd("402", "LIGHT_ON"),
                make_cmd("403", "LIGHT_OFF"),
            ]),
        ]),
    ]


@pytest.fixture
def virtual_plugins() -> List[Dict[str, Any]]:
    return [
        {"id": "virtual", "source": "market", "name": "Virtuel"},
        {"id": "zwavejs", "source": "market", "name": "Z-Wave JS"},
    ]
