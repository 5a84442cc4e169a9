# airtraffic/cli.py
import argparse
import sys
from typing import List, Optional

from airtraffic.catalog import get_report, reports
from airtraffic.errors import ClassificationError, ConfigurationError, RepositoryError
from airtraffic.load import Repository
from airtraffic.visualize import plot_report


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='airtraffic',
                                     description="Statistical reports over airline on-time data.")
    commands = parser.add_subparsers(dest='command', required=True)

    listing = commands.add_parser('list', help="list the available reports")
    listing.add_argument('--category', choices=['flight', 'plane', 'airport', 'carrier'])

    run = commands.add_parser('run', help="run one report")
    run.add_argument('name', help="report name, as shown by 'list'")
    run.add_argument('--year', type=int, help="flight year (default: latest configured)")
    run.add_argument('--limit', type=int, help="number of rows to show, 0 for all")
    run.add_argument('--origin', help="origin airport IATA code")
    run.add_argument('--destination', help="destination airport IATA code")
    run.add_argument('--carrier', help="carrier code")
    run.add_argument('--radius', type=float, help="search radius in statute miles")
    run.add_argument('--csv', help="also save the result to this CSV file")
    run.add_argument('--plot', help="also save a bar chart to this HTML file")
    return parser


def list_reports(category: Optional[str]) -> None:
    for entry in reports(category):
        params = ', '.join(entry.parameters)
        print(f"{entry.name:<55} {entry.description}" + (f" [{params}]" if params else ""))


def run_report(args: argparse.Namespace) -> None:
    entry = get_report(args.name)
    repository = Repository()

    year = args.year
    if year is None and 'year' in entry.parameters:
        year = repository.flight_years[-1]

    print(f"Running '{entry.description}'...")
    frame = entry.run(repository, year=year, limit=args.limit, origin=args.origin,
                      destination=args.destination, carrier=args.carrier, radius=args.radius)

    if frame.empty:
        print("No results.")
    else:
        print(frame.to_string(index=False))

    if args.csv:
        frame.to_csv(args.csv, index=False)
        print(f"Saved report to {args.csv}")
    if args.plot and not frame.empty:
        plot_report(frame, entry.description, args.plot)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        if args.command == 'list':
            list_reports(args.category)
        else:
            run_report(args)
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2
    except RepositoryError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except ClassificationError as exc:
        print(f"Data error: {exc}", file=sys.stderr)
        return 1
    except (KeyError, ValueError) as exc:
        # unknown report name, missing or invalid report parameter
        print(f"Error: {exc.args[0] if exc.args else exc}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
