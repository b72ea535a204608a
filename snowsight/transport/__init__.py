from snowsight.transport.executor import RequestExecutor, RequestOutcome

__all__ = ["RequestExecutor", "RequestOutcome"]
