from __future__ import annotations
import argparse, json, sys
from rtrie import Engine
from rtrie.config import TOP_K
from rtrie.errors import RtrieError

def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Prefix autocomplete CLI (Engine-backed)")
    g = p.add_mutually_exclusive_group(required=True)
    g.add_argument("--build", action="store_true", help="Index every *.jsonl item under --roots")
    g.add_argument("--load", action="store_true", help="Use an already populated store")

    p.add_argument("--roots", nargs="+", default=[], help="Folders to scan for .jsonl item files")
    p.add_argument("--db", default=None, help="Store DSN: redis://host:port/db or memory://")
    p.add_argument("--trie-key", default=None, help="Key prefix of the per-prefix sorted sets")
    p.add_argument("--metadata-key", default=None, help="Key of the metadata hash")
    p.add_argument("--add", metavar="KEY", default=None, help="Index KEY (needs --value and --id)")
    p.add_argument("--delete", metavar="KEY", default=None, help="Remove KEY for --id")
    p.add_argument("--value", default=None, help="JSON metadata for --add")
    p.add_argument("--id", dest="item_id", default=None, help="Item identifier")
    p.add_argument("--priority", type=float, default=0, help="Rank for --add")
    p.add_argument("-k", type=int, default=TOP_K, help="Top-K results")
    p.add_argument("--q", default=None, help="Single query to run once")
    p.add_argument("--repl", action="store_true", help="Interactive loop after init")
    p.add_argument("--json", action="store_true", help="Emit JSON rows")
    p.add_argument("--verbose", action="store_true")

    args = p.parse_args(argv)

    value = None
    if args.add is not None:
        if args.value is None or args.item_id is None:
            p.error("--add requires --value and --id")
        try:
            value = json.loads(args.value)
        except ValueError:
            value = args.value  # plain strings don't need quoting
    if args.delete is not None and args.item_id is None:
        p.error("--delete requires --id")

    eng = Engine()
    try:
        if args.build:
            if not args.roots:
                p.error("--build requires --roots")
            n = eng.build(roots=args.roots, db_dsn=args.db, trie_key=args.trie_key,
                          metadata_key=args.metadata_key, verbose=args.verbose)
            print(f"indexed {n} item(s)")
        else:
            eng.load(args.db, trie_key=args.trie_key, metadata_key=args.metadata_key,
                     verbose=args.verbose)

        if args.add is not None:
            parts = eng.add(args.add, value, args.item_id, args.priority)
            print(f"added {args.item_id} under {len(parts)} prefix(es)")
        if args.delete is not None:
            eng.delete(args.delete, args.item_id)
            print(f"deleted {args.item_id}")

        def run_query(q: str):
            rows = eng.complete(q, top_k=args.k)
            if args.json:
                print(json.dumps(rows, ensure_ascii=False, indent=2))
            else:
                if not rows:
                    print("(no matches)"); return
                for i, r in enumerate(rows, 1):
                    print(f"{i:<3} {json.dumps(r, ensure_ascii=False)}")

        if args.q:
            run_query(args.q)

        if args.repl:
            print("Type a prefix (empty line to exit).")
            while True:
                try:
                    q = input("> ").strip()
                except (EOFError, KeyboardInterrupt):
                    break
                if not q:
                    break
                run_query(q)

        return 0
    except RtrieError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    finally:
        eng.shutdown()

if __name__ == "__main__":
    raise SystemExit(main())
