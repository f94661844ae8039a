import json
import logging
import sys

from pydantic import ValidationError

from common.logging import configure_logging

from .batch import build_transfer, load_request
from .errors import SepaRuleError

logger = logging.getLogger(__name__)

USAGE = "Usage: python -m direct_debit.cli <batch.json> [output.xml]"


def main(argv=None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if len(args) not in (1, 2):
        print(USAGE, file=sys.stderr)
        return 1

    configure_logging(service_name="direct-debit-cli")
    try:
        request = load_request(args[0])
    except (OSError, json.JSONDecodeError) as exc:
        logger.error("cannot read batch %s: %s", args[0], exc)
        return 1
    except ValidationError as exc:
        logger.error("malformed batch %s: %s", args[0], exc)
        return 2

    try:
        transfer = build_transfer(request)
        if len(args) == 2:
            transfer.save(args[1])
        else:
            sys.stdout.write(transfer.to_xml())
    except (SepaRuleError, ValidationError) as exc:
        logger.error("cannot build direct debit from %s: %s", args[0], exc)
        return 2
    except OSError as exc:
        logger.error("cannot write %s: %s", args[1], exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
