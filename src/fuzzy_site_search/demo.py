import argparse
import json
import logging
import os
import sys

from .general.utils import ConfigFileNotFound, ConfigParseError, ConfigTypeError, DataDirNotFound, enable_topics
from .search import ConfigurationError, SearchEngine
from .site import load_corpus, load_site_locales, locale_for


def main(argv=None):
    """CLI: fuzzy-search a site's page corpus with the site's per-locale search options."""
    parser = argparse.ArgumentParser(
        prog="site-search",
        description="Fuzzy-search a site corpus (index.json) using the site config's fuseOpts.",
    )
    parser.add_argument(
        "query",
        nargs="*",
        help="Text to search for (e.g. golang lambda)",
    )
    parser.add_argument("--config", required=True, help="Site config file (hugo.yaml / .json)")
    parser.add_argument("--corpus", required=True, help="Search feed: JSON list of page records")
    parser.add_argument("--lang", default=None, help="Locale code (defaults to the site default)")
    parser.add_argument("--limit", type=int, default=None, help="Max results (overrides fuseOpts.limit)")
    parser.add_argument("--matches", action="store_true", help="Include matched spans")
    parser.add_argument("--debug", action="store_true", help="Verbose debug logs")

    args = parser.parse_args(argv)
    if args.debug:
        logging.basicConfig(level=logging.DEBUG)
        enable_topics("all")

    query = " ".join(args.query)

    try:
        locales, default_code = load_site_locales(os.path.abspath(args.config))
        settings = locale_for(locales, args.lang or default_code)
        options = settings.search_options
        if args.matches:
            options = options.replace(include_matches=True)
        engine = SearchEngine(load_corpus(os.path.abspath(args.corpus)), options, locale=settings.code)
        results = engine.search_dicts(query, limit=args.limit)
    except (
        ConfigurationError,
        ConfigFileNotFound,
        ConfigParseError,
        ConfigTypeError,
        DataDirNotFound,
        KeyError,
        TypeError,
    ) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(json.dumps(results, indent=2, ensure_ascii=False, default=str))
    return 0


if __name__ == "__main__":
    sys.exit(main())
