from logging import ERROR, WARN, LogRecord, StreamHandler, getLogger
from sys import stdout

log = getLogger(__package__)


class _Handler(StreamHandler):
    def handle(self, record: LogRecord) -> bool:
        if record.levelno <= WARN:
            return super().handle(record)
        else:
            return False


_log = _Handler(stream=stdout)
_err = StreamHandler()
_err.setLevel(ERROR)


log.addHandler(_log)
log.addHandler(_err)
log.setLevel(WARN)
