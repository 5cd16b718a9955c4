"""Capability enhancers."""

from error_enhanced.core.enhancers.application_state import ApplicationStateEnhancer, parse_dependency_listing
from error_enhanced.core.enhancers.base import Enhancer
from error_enhanced.core.enhancers.command_executor import CommandExecutor, SubprocessCommandExecutor
from error_enhanced.core.enhancers.error_analysis import ErrorAnalysisEnhancer, StackTraceParser
from error_enhanced.core.enhancers.http_status import HttpStatusEnhancer
from error_enhanced.core.enhancers.identifiers import IdentifiersEnhancer
from error_enhanced.core.enhancers.system_context import SystemContextEnhancer
from error_enhanced.core.enhancers.user_info import UserInfoEnhancer

__all__ = [
    "Enhancer",
    "IdentifiersEnhancer",
    "HttpStatusEnhancer",
    "SystemContextEnhancer",
    "UserInfoEnhancer",
    "ApplicationStateEnhancer",
    "ErrorAnalysisEnhancer",
    "StackTraceParser",
    "CommandExecutor",
    "SubprocessCommandExecutor",
    "parse_dependency_listing",
]
