"""casewright: scenario-grouped test cases and conformance repair for generated specs."""

__version__ = "0.1.0"
