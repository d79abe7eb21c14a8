"""Load test script — many threads appending to one shared log file."""

import argparse
import logging
import os
import sys
import threading
import time

from filelog.config import load_config, load_yaml_config
from filelog.errors import ShortWriteError
from filelog.severity import Severity, format_line
from filelog.writer import LogWriter

logger = logging.getLogger(__name__)

SEVERITIES = [Severity.STATUS, Severity.STATUS, Severity.WARNING, Severity.ERROR]


def message_for(worker_id: int, seq: int) -> tuple[str, Severity]:
    severity = SEVERITIES[seq % len(SEVERITIES)]
    return f"worker-{worker_id} message-{seq:06d}", severity


def expected_line(message: str, severity: Severity, encoding: str = "utf-8") -> str:
    return format_line(message, severity, encoding).decode(encoding).rstrip("\n")


def worker(writer: LogWriter, worker_id: int, count: int,
           results: dict, lock: threading.Lock, encoding: str = "utf-8"):
    """Write `count` numbered messages, tallying successes and failures."""
    written = []
    short_writes = 0
    io_errors = 0

    for seq in range(count):
        message, severity = message_for(worker_id, seq)
        try:
            writer.write(message, severity)
        except ShortWriteError:
            short_writes += 1
            continue
        except OSError as e:
            logger.warning("Worker %d write failed: %s", worker_id, e)
            io_errors += 1
            continue
        written.append(expected_line(message, severity, encoding))

    with lock:
        results["lines"].extend(written)
        results["short_writes"] += short_writes
        results["io_errors"] += io_errors


def verify_log(path: str, expected_lines: list[str], offset: int = 0,
               encoding: str = "utf-8") -> bool:
    """Check the file past *offset* holds each expected line exactly once."""
    with open(path, "rb") as f:
        f.seek(offset)
        raw = f.read()
    try:
        data = raw.decode(encoding)
    except UnicodeDecodeError as e:
        logger.error("Log is not valid %s: %s", encoding, e)
        return False

    if data and not data.endswith("\n"):
        logger.error("Log does not end with a newline")
        return False

    actual = data.splitlines()
    if len(actual) != len(expected_lines):
        logger.error("Expected %d lines, found %d", len(expected_lines), len(actual))
        return False
    if sorted(actual) != sorted(expected_lines):
        missing = set(expected_lines) - set(actual)
        logger.error("Log content mismatch (%d lines missing or torn)", len(missing))
        return False
    return True


def run(path: str, total: int, threads: int, config=None) -> bool:
    """Drive `threads` workers against one writer and verify the result."""
    if threads < 1:
        raise ValueError("threads must be >= 1")
    if total < 0:
        raise ValueError("total must be >= 0")

    if config is not None:
        writer = LogWriter(mode=config.file_mode, encoding=config.encoding)
    else:
        writer = LogWriter()
    encoding = writer.encoding

    offset = os.path.getsize(path) if os.path.exists(path) else 0
    writer.open(path)

    per_thread, extra = divmod(total, threads)
    results = {"lines": [], "short_writes": 0, "io_errors": 0}
    lock = threading.Lock()
    start = time.monotonic()

    workers = []
    for wid in range(threads):
        t = threading.Thread(
            target=worker,
            args=(writer, wid, per_thread + (1 if wid < extra else 0), results, lock, encoding),
        )
        workers.append(t)
        t.start()

    for t in workers:
        t.join()

    elapsed = time.monotonic() - start
    writer.close()

    ok = verify_log(path, results["lines"], offset, encoding)
    rate = len(results["lines"]) / elapsed if elapsed > 0 else 0

    logger.info("=" * 50)
    logger.info("Load Test Results:")
    logger.info("  Written:       %d", len(results["lines"]))
    logger.info("  Short writes:  %d", results["short_writes"])
    logger.info("  I/O errors:    %d", results["io_errors"])
    logger.info("  Elapsed:       %.2fs", elapsed)
    logger.info("  Rate:          %.0f writes/sec", rate)
    logger.info("  Threads:       %d", threads)
    logger.info("  Verified:      %s", ok)
    logger.info("=" * 50)

    return ok and results["short_writes"] == 0 and results["io_errors"] == 0


def main(argv=None) -> int:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s — %(message)s",
        stream=sys.stderr,
    )

    parser = argparse.ArgumentParser(description="Concurrent log writer load test")
    parser.add_argument("--config", help="YAML config file")
    parser.add_argument("--path", help="Log file path (overrides config)")
    parser.add_argument("--messages", type=int, default=1000, help="Total messages to write")
    parser.add_argument("--threads", type=int, default=4, help="Number of writer threads")
    args = parser.parse_args(argv)

    if args.threads < 1 or args.messages < 0:
        parser.error("--threads must be >= 1 and --messages must be >= 0")

    config = load_config(load_yaml_config(args.config))
    path = args.path or config.log_path
    if config.create_dirs and os.path.dirname(path):
        os.makedirs(os.path.dirname(path), exist_ok=True)

    logger.info(
        "Load test: %d messages, %d threads, path %s",
        args.messages, args.threads, path,
    )
    return 0 if run(path, args.messages, args.threads, config) else 1


if __name__ == "__main__":
    sys.exit(main())
