"""
DRCA Command Line Interface (CLI)
=================================

Interactive terminal program you run like:

    python -m drca.cli --data-dir path/to/data

It loads the four datasets once, builds the indices, and then answers one
query per command in a REPL (Read-Eval-Print Loop). The CLI never modifies
the dataset files.
"""

from __future__ import annotations
import argparse, logging, shlex
from typing import List, Optional
from .loader import load_datasets, SUPPORTED_FORMATS
from .indices import build_indices
from .engine import DRCA, REGION_MAP

HELP = """
DRCA commands
-------------

1) Claims
   closed                              number of closed claims
   handler-claims <handler_id>         claims assigned to a claim handler
   handler-avg <handler_id>            average claim cost for a claim handler
   open-claims <agent_id> <severity>   open claims for an agent at/above severity (1-10)
   agent-costs [n]                     total claim cost per agent (first n, default 10)

2) Disasters
   state-disasters "<State>"           disasters declared in a state
   region <west|midwest|south|northeast>
   most-state | least-state            state with most / least disasters
   late-declared                       disasters declared after their end date
   disaster-cost <disaster_id>         total claim cost for a disaster
   density <disaster_id>               claims per square mile of impact area
   top-months                          top three months by total claim cost

3) Agents
   language "<State>"                  most spoken secondary language (besides English)

4) Overview / Report
   summary
   stats
   states
   report "<out.docx>"

5) Exit
   quit
"""

# Commands that only inspect, not worth recording in the report's command log
_NOT_LOGGED = ("help", "stats", "states", "quit", "exit")


def _fmt(value) -> str:
    """Render query results; None prints as n/a."""
    if value is None:
        return "n/a"
    if value == "":
        return "(none)"
    return str(value)


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the DRCA CLI.

    1) Load datasets
    2) Build indices
    3) Start an interactive REPL
    """
    ap = argparse.ArgumentParser(prog="drca", description="Disaster Relief Claims Analytics")
    ap.add_argument("--data-dir", required=True, help="Directory holding the dataset files")
    ap.add_argument("--prefix", default="sfcc_2023", help="File name prefix (default: sfcc_2023)")
    ap.add_argument("--format", dest="fmt", default="json", choices=SUPPORTED_FORMATS)
    ap.add_argument("--log-level", default="WARNING", help="Python logging level (default: WARNING)")
    args = ap.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    print("Loading datasets...")
    data = load_datasets(args.data_dir, prefix=args.prefix, fmt=args.fmt)
    idx = build_indices(data.disasters)
    engine = DRCA(
        disasters=data.disasters,
        claims=data.claims,
        agents=data.agents,
        claim_handlers=data.claim_handlers,
        idx=idx,
        dataset_path=args.data_dir,
    )

    print(f"Loaded {len(data.disasters)} disasters, {len(data.claims)} claims, "
          f"{len(data.agents)} agents. Type 'help' for commands.")
    while True:
        try:
            line = input("drca> ")
        except EOFError:
            break
        stripped = line.strip()
        if not stripped:
            continue
        if stripped.lower() in ("quit", "exit"):
            break
        if stripped.split()[0].lower() not in _NOT_LOGGED:
            engine.command_log.append(stripped)
        try:
            handle(engine, stripped)
        except Exception as e:
            print(f"Error: {e}")


def handle(engine: DRCA, line: str) -> None:
    """Handle one CLI command line.

    This parses the command and calls the matching engine query.
    """
    parts = shlex.split(line)
    cmd = parts[0].lower()
    args = parts[1:]

    def _need(n: int, usage: str) -> None:
        if len(args) < n:
            raise ValueError(f"usage: {usage}")

    if cmd == "help":
        print(HELP)
        return

    if cmd == "stats":
        print(f"Disasters: {len(engine.disasters)} | Claims: {len(engine.claims)} | "
              f"Agents: {len(engine.agents)} | Claim handlers: {len(engine.claim_handlers)}")
        print(f"States with disasters: {len(engine.idx.disaster_counts)}")
        return

    if cmd == "states":
        for s in engine.idx.states_sorted:
            print(f"{s}: {engine.idx.disaster_counts[s]}")
        return

    if cmd == "closed":
        print(engine.get_num_closed_claims())
        return

    if cmd == "handler-claims":
        _need(1, "handler-claims <handler_id>")
        print(engine.get_num_claims_for_claim_handler_id(int(args[0])))
        return

    if cmd == "handler-avg":
        _need(1, "handler-avg <handler_id>")
        print(_fmt(engine.get_average_claim_cost_for_claim_handler(int(args[0]))))
        return

    if cmd == "open-claims":
        _need(2, "open-claims <agent_id> <severity>")
        n = engine.get_num_of_open_claims_for_agent_and_severity(int(args[0]), int(args[1]))
        if n == -1:
            print("Severity must be between 1 and 10.")
            return
        print(_fmt(n))
        return

    if cmd == "agent-costs":
        limit = int(args[0]) if args else 10
        costs = engine.build_map_of_agents_to_total_claim_cost()
        names = {a.id: a.full_name() for a in engine.agents}
        for agent_id, total in list(costs.items())[:limit]:
            print(f"[{agent_id}] {names[agent_id]}: {total:,.2f}")
        if len(costs) > limit:
            print(f"... ({len(costs)} agents, showing {limit})")
        return

    if cmd == "state-disasters":
        _need(1, 'state-disasters "<State>"')
        print(engine.get_num_disasters_for_state(args[0]))
        return

    if cmd == "region":
        _need(1, f"region <{'|'.join(REGION_MAP)}>")
        print(engine.get_num_disasters_for_region(args[0]))
        return

    if cmd == "most-state":
        print(_fmt(engine.get_state_with_most_disasters()))
        return

    if cmd == "least-state":
        print(_fmt(engine.get_state_with_least_disasters()))
        return

    if cmd == "late-declared":
        print(engine.get_num_disasters_declared_after_end_date())
        return

    if cmd == "disaster-cost":
        _need(1, "disaster-cost <disaster_id>")
        print(_fmt(engine.get_total_claim_cost_for_disaster(int(args[0]))))
        return

    if cmd == "density":
        _need(1, "density <disaster_id>")
        print(_fmt(engine.calculate_disaster_claim_density(int(args[0]))))
        return

    if cmd == "top-months":
        months = engine.get_top_three_months_with_highest_num_of_claims_desc()
        for i, m in enumerate(months, start=1):
            print(f"{i}. {m}")
        if not months:
            print("(none)")
        return

    if cmd == "language":
        _need(1, 'language "<State>"')
        print(_fmt(engine.get_most_spoken_agent_language_by_state(args[0])))
        return

    if cmd == "summary":
        for k, v in engine.summary().items():
            if isinstance(v, list):
                v = ", ".join(v) if v else None
            print(f"{k}: {_fmt(v)}")
        return

    if cmd == "report":
        # report "<path.docx>"
        from .report import generate_docx_report, ReportConfig
        _need(1, 'report "<out.docx>"')
        cfg = ReportConfig(command_log=engine.command_log)
        generate_docx_report(engine, args[0], config=cfg)
        print(f"Report written to {args[0]}")
        return

    print("Unknown command. Type 'help'.")


if __name__ == "__main__":
    main()
