from whowon.orchestrator.pipeline import SelectionResult, select_winners

__all__ = ["SelectionResult", "select_winners"]
