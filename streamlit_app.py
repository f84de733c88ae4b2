# streamlit_app.py
import streamlit as st

from csvedit.client import ApiError, CsvApiClient, frame_to_rows, rows_to_frame
from csvedit.config import get_settings

SEPARATORS = {
    "Comma (,)": ",",
    "Semicolon (;)": ";",
    "Tab": "\t",
    "Pipe (|)": "|",
}

st.set_page_config(page_title="CSV Editor", layout="wide")
st.title("CSV Editor")

# -------------------------
# Helpers
# -------------------------
def get_client() -> CsvApiClient:
    return CsvApiClient(st.session_state.get("api_base", get_settings().api_base))

def call(fn, *args, success: str | None = None, **kwargs):
    """Run an API call, show errors inline and rerun after successful edits."""
    try:
        result = fn(*args, **kwargs)
    except ApiError as e:
        st.error(e.message)
        if e.details:
            st.caption(e.details)
        return None
    except Exception as e:
        st.error("Could not reach the API")
        st.exception(e)
        return None
    if success:
        st.session_state["flash"] = success
        st.rerun()
    return result

def open_file(filename: str, separator: str):
    st.session_state["current"] = filename
    st.session_state["separator"] = separator

# -------------------------
# Sidebar: files
# -------------------------
with st.sidebar:
    st.header("Settings")
    st.session_state["api_base"] = st.text_input("API base URL", value=st.session_state.get("api_base", get_settings().api_base))

    client = get_client()

    st.header("Upload")
    with st.form("upload", clear_on_submit=True):
        uploaded = st.file_uploader("CSV file", type=["csv"])
        upload_sep = st.selectbox("Separator", list(SEPARATORS), key="upload_sep")
        if st.form_submit_button("Upload") and uploaded is not None:
            call(client.upload, uploaded.name, uploaded.getvalue(), SEPARATORS[upload_sep], success=f"Uploaded {uploaded.name}")

    st.header("Files")
    files = call(client.list_files) or []
    if not files:
        st.info("No CSV files uploaded yet.")
    for name in files:
        cols = st.columns([3, 1, 1])
        with cols[0].popover(name, use_container_width=True):
            sep_label = st.selectbox("Which separator does this file use?", list(SEPARATORS), key=f"sep_{name}")
            if st.button("Open", key=f"open_{name}"):
                open_file(name, SEPARATORS[sep_label])
                st.rerun()
        if cols[1].button("📦", key=f"archive_{name}", help="Archive"):
            if st.session_state.get("current") == name:
                st.session_state.pop("current")
            call(client.archive, name, success=f"Archived {name}")
        data = call(client.download, name)
        if data is not None:
            cols[2].download_button("⬇", data=data, file_name=name, mime="text/csv", key=f"dl_{name}")

if "flash" in st.session_state:
    st.success(st.session_state.pop("flash"))

# -------------------------
# Table editor
# -------------------------
current = st.session_state.get("current")
if not current:
    st.info("Pick a file in the sidebar and confirm its separator to start editing.")
    st.stop()

separator = st.session_state.get("separator")
table = call(client.get_table, current, separator)
if table is None:
    st.warning("Could not load the file. Is the separator right?")
    st.stop()
# the server remembers the separator; after the first edit the file is comma separated
st.session_state["separator"] = None

headers = table["headers"]
rows = table["rows"]

st.subheader(current)
st.caption(f"{len(rows)} rows · {len(headers)} columns · read with {table['separator']!r}")
st.dataframe(rows_to_frame(headers, rows), use_container_width=True)

tab_rows, tab_columns, tab_bulk = st.tabs(["Rows", "Columns", "Bulk edit"])

with tab_rows:
    with st.expander("Add row"):
        with st.form("add_row", clear_on_submit=True):
            new_row = {h: st.text_input(h, key=f"add_{h}") for h in headers}
            extra = st.text_input("New column name (only for empty files)") if not headers else None
            if st.form_submit_button("Add"):
                if extra:
                    new_row = {extra: ""}
                call(client.add_row, current, new_row, success="Row added")

    if rows:
        index = st.number_input("Row index", min_value=0, max_value=len(rows) - 1, step=1)
        with st.form("edit_row"):
            updated = {h: st.text_input(h, value=rows[index].get(h, ""), key=f"edit_{index}_{h}") for h in headers}
            save, delete = st.columns(2)
            if save.form_submit_button("Save row"):
                call(client.update_row, current, int(index), updated, success=f"Row {index} updated")
            if delete.form_submit_button("Delete row"):
                call(client.delete_row, current, int(index), success=f"Row {index} deleted")

with tab_columns:
    for i, h in enumerate(headers):
        cols = st.columns([4, 1, 1, 1])
        cols[0].write(h)
        if cols[1].button("▲", key=f"up_{i}", disabled=i == 0):
            call(client.move_column, current, i, "up", success=f"Moved {h} up")
        if cols[2].button("▼", key=f"down_{i}", disabled=i == len(headers) - 1):
            call(client.move_column, current, i, "down", success=f"Moved {h} down")
        if cols[3].button("✕", key=f"del_{i}"):
            call(client.delete_column, current, i, success=f"Deleted column {h}")

with tab_bulk:
    st.write("Edit cells directly, then save the whole table.")
    edited = st.data_editor(rows_to_frame(headers, rows), num_rows="dynamic", use_container_width=True)
    if st.button("Save table"):
        call(client.replace_structure, current, frame_to_rows(edited), headers=list(edited.columns), success="Table saved")
