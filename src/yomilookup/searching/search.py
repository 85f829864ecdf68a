import sys
from pathlib import Path

import streamlit as st

PROJECT_ROOT = Path(__file__).resolve().parents[3]
SRC_DIR = PROJECT_ROOT / "src"

if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from yomilookup.config import Settings
from yomilookup.errors import TokenizationError
from yomilookup.indexing.loader import LoadReport, load_index
from yomilookup.searching.render import render_entry
from yomilookup.searching.resolver import LookupResolver
from yomilookup.searching.tokenizer import SudachiBaseForm


@st.cache_resource(show_spinner=False)
def get_report() -> LoadReport:
    # Cached so Streamlit does not re-read every term bank on each interaction.
    settings = Settings.from_env()
    return load_index(
        settings.dictionaries_dir,
        pattern=settings.file_pattern,
        workers=settings.load_workers,
    )


@st.cache_resource(show_spinner=False)
def get_resolver() -> LookupResolver:
    settings = Settings.from_env()
    return LookupResolver(get_report().index, SudachiBaseForm(settings.sudachi_dict))


def render_results(results):
    for match in results:
        title = f"Results from {match.collection_id}"
        if match.via_lemma:
            title = f"{title} (base form: {match.matched_key})"
        st.subheader(title)
        for entry in match.entries:
            rendered = render_entry(entry)
            header = f"**{rendered.term}**"
            if rendered.reading and rendered.reading != rendered.term:
                header = f"{header} ({rendered.reading})"
            if rendered.tags:
                header = f"{header} `{' '.join(rendered.tags)}`"
            st.markdown(header)
            if rendered.lines:
                st.code("\n".join(rendered.lines), language="text")


def main():
    st.title("Dictionary Lookup")
    st.caption("Exact term or reading match, with a base-form fallback")

    query = st.text_input("Enter a query", "").strip()
    if not query:
        st.info("Enter a term or reading to search the installed dictionaries.")
        return

    try:
        with st.spinner("Loading dictionaries..."):
            report = get_report()
            resolver = get_resolver()
    except Exception as exc:
        st.error("Could not load the dictionaries. Check YOMILOOKUP_DICTIONARIES.")
        st.exception(exc)
        return

    if report.skipped_files:
        st.warning(f"{len(report.skipped_files)} dictionary files could not be parsed.")

    try:
        results = resolver.resolve(query)
    except TokenizationError as exc:
        st.warning(f"Base form lookup failed: {exc}")
        results = exc.partial

    if not results:
        st.warning("No results found.")
        return

    render_results(results)


if __name__ == "__main__":
    main()
