"""Shared wire-format fixtures for GHR client tests."""

import copy

import pytest

_REPORT = {
    "os": {
        "name": "Fedora Linux",
        "version": "41",
        "architecture": "x86_64",
        "other": {"kernel": "6.11.4"},
    },
    "machine": {
        "vendor": "Framework",
        "model": "Laptop 13",
        "bios": {"vendor": "INSYDE", "version": "03.05", "date": "2024-02-12"},
        "chassis": {"kind": "Notebook", "vendor": None, "version": None},
        "hash": {"Random": "5f2c0d"},
    },
    "components": [
        {
            "bus": "Sys",
            "id": "AMD Ryzen 7 7840U",
            "class": None,
            "vendor_id": "AuthenticAMD",
            "status": None,
            "desc": {
                "CpuDescription": {
                    "clock_speed": {"min": 400, "max": 5132},
                    "core_ct": 8,
                    "cache": [
                        {"L1": {"size": 512, "speed": None}},
                        {"L2": {"size": 8192, "speed": None}},
                    ],
                    "cores": None,
                }
            },
        },
        {
            "bus": "Pci",
            "id": "Radeon 780M",
            "desc": {
                "GpuDescription": {
                    "clock_speed": 2700,
                    "video_memory": 4096,
                    "video_memory_speed": None,
                }
            },
        },
        {
            "bus": "Sys",
            "id": None,
            "desc": {
                "RamDescription": {
                    "total_phsyical_memory": 33554432000,
                    "configured_clock_speed": 5600,
                    "configured_voltage": None,
                    "removable": "NonRemovable",
                }
            },
        },
        {
            "bus": "Nvme",
            "id": "WD_BLACK SN850X",
            "desc": {
                "StorageDescription": {
                    "kind": "Ssd",
                    "usage": {"usage": 812345344000, "total_capacity": 2000398934016},
                    "speed": None,
                    "connector": "Pcie",
                    "is_removable": False,
                }
            },
        },
        {
            "bus": "Usb",
            "id": "Logitech USB Receiver",
            "vendor_id": "046d",
            "desc": "None",
        },
        {
            "bus": "Pci",
            "id": "Thunderbolt 4 controller",
            "class": "0c0340",
            "desc": {"PciDescription": {"slot": "0000:00:0d.0"}},
        },
    ],
    "sys_conf": {},
}


@pytest.fixture
def report_payload():
    """A full report as a GHR collector writes it."""
    return copy.deepcopy(_REPORT)


@pytest.fixture
def wrapped_payload(report_payload):
    """One entry of a ``GET /reports`` response."""
    return {
        "id": "report-1",
        "recv_time": "2024-06-01T12:30:00Z",
        "report": report_payload,
    }


@pytest.fixture
def cpu_component():
    """Factory for a CPU component payload."""

    def _make(component_id="cpu0", min_clock=None, max_clock=None):
        return {
            "id": component_id,
            "desc": {
                "CpuDescription": {
                    "clock_speed": {"min": min_clock, "max": max_clock},
                }
            },
        }

    return _make
