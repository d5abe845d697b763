import logging

import streamlit as st
import pandas as pd
import plotly.express as px

from components.bench import BenchConfig, BenchmarkError, make_keys, run_benchmark, summarize
from components.work_loads import KINDS
from tries import ByteTrie

logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")
logger = logging.getLogger("trie-bench")

# Configure page
st.set_page_config(
    page_title="ByteTrie Bench",
    page_icon="🌳",
    layout="wide",
    initial_sidebar_state="expanded"
)

st.title("🌳 ByteTrie Bench")
st.markdown("---")

if 'trie' not in st.session_state:
    st.session_state['trie'] = ByteTrie()

# Sidebar
with st.sidebar:
    st.header("Navigation")
    page = st.selectbox("Choose a section:", ["Benchmark", "Explorer"])

    st.markdown("---")
    st.subheader("Workload")
    workload = st.selectbox("Key kind", KINDS)
    num_keys = st.number_input("Keys", min_value=1, max_value=500_000, value=10_000, step=1_000)
    seed = st.number_input("Seed", min_value=0, value=42, step=1)
    prefix_freq = st.slider("Prefix frequency (words only)", 0.0, 1.0, 0.0, 0.05)
    repeats = st.number_input("Repeats", min_value=1, max_value=20, value=3)


if page == "Benchmark":
    st.header("⏱️ Benchmark")
    st.markdown(
        "Each repeat builds a fresh trie, then times **insert**, **find**, "
        "a full **scan**, and **delete** of every key. A run fails loudly if "
        "any lookup misses, the scan is out of order, or nodes leak after deletion."
    )

    if st.button("▶️ Run benchmark"):
        config = BenchConfig(workload=workload, num_keys=int(num_keys), seed=int(seed),
                             prefix_freq=float(prefix_freq), repeats=int(repeats))
        try:
            with st.spinner("Running..."):
                st.session_state['results'] = run_benchmark(config)
                st.session_state['results_config'] = config
        except BenchmarkError as e:
            logger.error("benchmark failed: %s", e)
            st.error(f"❌ Benchmark failed: {e}")

    if 'results' in st.session_state:
        df = st.session_state['results']
        config = st.session_state['results_config']
        summary = summarize(df)

        col1, col2, col3, col4 = st.columns(4)
        with col1:
            st.metric("Workload", config.workload)
        with col2:
            st.metric("Keys", f"{config.num_keys:,}")
        with col3:
            st.metric("Distinct keys", f"{int(df[df['operation'] == 'scan']['keys'].iloc[0]):,}")
        with col4:
            st.metric("Peak nodes", f"{int(summary['max_nodes'].max()):,}")

        tab1, tab2, tab3 = st.tabs(["Throughput", "Timings", "Raw"])
        with tab1:
            fig = px.bar(summary.reset_index(), x="operation", y="mean_ops_per_sec",
                         title="Mean throughput (ops/sec)")
            st.plotly_chart(fig, use_container_width=True)
        with tab2:
            fig = px.box(df, x="operation", y="seconds", points="all",
                         title=f"Seconds per operation over {config.repeats} repeats")
            st.plotly_chart(fig, use_container_width=True)
            st.dataframe(summary)
        with tab3:
            st.dataframe(df, use_container_width=True)
    else:
        st.info("👈 Configure a workload and press Run")

elif page == "Explorer":
    st.header("🔍 Explorer")
    trie = st.session_state['trie']

    col1, col2 = st.columns(2)
    with col1:
        key = st.text_input("Key")
        value = st.text_input("Value")
        b1, b2, b3 = st.columns(3)
        if b1.button("Insert"):
            trie.insert(key, value)
            st.success(f"Inserted {key!r}")
        if b2.button("Find"):
            found_value, found = trie.find(key)
            if found:
                st.success(f"{key!r} → {found_value!r}")
            else:
                st.warning(f"{key!r} not found")
        if b3.button("Delete"):
            if trie.delete(key):
                st.success(f"Deleted {key!r}")
            else:
                st.warning(f"{key!r} not found")

        if st.button("🔄 Load sample workload"):
            config = BenchConfig(workload=workload, num_keys=int(num_keys), seed=int(seed),
                                 prefix_freq=float(prefix_freq))
            trie.batch_insert((k, None) for k in make_keys(config))
            st.rerun()

    with col2:
        st.metric("Stored keys", f"{len(trie):,}")
        st.metric("Nodes", f"{trie.count_nodes():,}")
        st.metric("Avg branch factor", f"{trie.count_nodes(get_avg_branch_factor=True):.2f}")

    st.subheader("Contents (byte order)")
    limit = st.slider("Rows", 10, 1_000, 100)
    rows = []
    for k, v in trie.items():
        rows.append({"key": k.decode("utf-8", errors="backslashreplace"), "value": v})
        if len(rows) >= limit:
            break
    st.dataframe(pd.DataFrame(rows, columns=["key", "value"]), use_container_width=True)

# Footer
st.markdown("---")
st.markdown(
    """
    <div style='text-align: center; color: #B0B0B0; padding: 1rem;'>
        Built with Streamlit 🚀 | ByteTrie Bench
    </div>
    """,
    unsafe_allow_html=True
)
