"""
Launch assembly and process supervision.
"""

from .arguments import ArgumentSubstitutor
from .assembler import LaunchAssembler, ProcessLaunchInfo
from .supervisor import ProcessSupervisor

__all__ = ["ArgumentSubstitutor", "LaunchAssembler", "ProcessLaunchInfo", "ProcessSupervisor"]
