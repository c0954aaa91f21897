import argparse
import logging
import sys

from equity_lookup.config import Settings
from equity_lookup.domain.errors import EquityLookupError
from equity_lookup.infrastructure.sources import open_source_lines
from equity_lookup.infrastructure.text.parser import Rejection
from equity_lookup.logging_conf import setup_logging
from equity_lookup.service.equity_service import EquityService
from equity_lookup.service.report import INPUT_INVALID, NOT_FOUND, format_codes, format_equity

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="equity-lookup",
        description="Consulta em memória de ações carregadas de um arquivo delimitado por '|'.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument(
        "--input",
        default="-",
        help="Arquivo de entrada, URL http(s) ou '-' para ler da entrada padrão.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Define o nível de detalhamento dos logs de execução.",
    )
    parser.add_argument(
        "--report-rejects",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Imprime 'Input invalid' para cada linha rejeitada.",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=20,
        help="Timeout em segundos para entradas remotas.",
    )
    parser.add_argument(
        "--max-attempts",
        type=int,
        default=5,
        help="Número máximo de tentativas para entradas remotas.",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    info = commands.add_parser("info", help="Mostra os atributos de um ou mais códigos.")
    info.add_argument("codes", nargs="+", metavar="CODE")

    commands.add_parser("codes", help="Lista todos os códigos em ordem alfabética.")
    commands.add_parser("lowest-pe", help="Código com o menor P/E (desempate pelo preço).")

    pe_range = commands.add_parser("pe-range", help="Ações com MIN <= P/E <= MAX.")
    pe_range.add_argument("min_pe", type=float, metavar="MIN")
    pe_range.add_argument("max_pe", type=float, metavar="MAX")

    commands.add_parser("summary", help="Contagem de linhas aceitas e rejeitadas.")

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = Settings(
        input=args.input,
        log_level=args.log_level,
        report_rejects=args.report_rejects,
        timeout=args.timeout,
        max_attempts=args.max_attempts,
    )

    setup_logging(settings.log_level)

    def on_reject(rejection: Rejection) -> None:
        logger.warning(
            "Linha rejeitada | motivo=%s | detalhe=%s | linha=%s",
            rejection.reason.value,
            rejection.detail,
            rejection.line,
        )
        if settings.report_rejects:
            print(INPUT_INVALID)

    service = EquityService()
    try:
        service.initialize(open_source_lines(settings.input, settings), on_reject=on_reject)
    except EquityLookupError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    _run_command(args, service)


def _run_command(args: argparse.Namespace, service: EquityService) -> None:
    if args.command == "info":
        for code in args.codes:
            equity = service.get_security_info(code)
            print(format_equity(equity) if equity is not None else NOT_FOUND)
    elif args.command == "codes":
        codes = service.all_security_codes()
        if codes:
            print(format_codes(codes))
    elif args.command == "lowest-pe":
        print(service.lowest_pe() or NOT_FOUND)
    elif args.command == "pe-range":
        for equity in service.get_pe_range(args.min_pe, args.max_pe):
            print(format_equity(equity))
    elif args.command == "summary":
        summary = service.summary
        print(f"accepted: {summary.accepted}")
        print(f"rejected: {summary.rejected}")
        print(f"replaced: {summary.replaced}")
