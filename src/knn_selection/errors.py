class NotTrainedError(RuntimeError):
    pass
