import pandas as pd
import matplotlib.pyplot as plt
import seaborn as sns
import os
import numpy as np

RESULTS_DIR = os.path.dirname(os.path.abspath(__file__))
PLOTS_DIR = os.path.join(RESULTS_DIR, "plots")

# Load results
results_file = os.path.join(RESULTS_DIR, "benchmark_results.csv")
if not os.path.exists(results_file):
    print(f"Error: Results file not found: {results_file}")
    exit(1)

df = pd.read_csv(results_file)

# Clean data
df = df.replace("FAIL", float('nan'))
for column in ['avg_time', 'min_time', 'max_time', 'stdev']:
    df[column] = pd.to_numeric(df[column], errors='coerce')

df_clean = df.dropna(subset=['avg_time']).copy()

# Throughput of the emitted window
df_clean['throughput_MBps'] = np.where(
    df_clean['avg_time'] > 0,
    (df_clean['window_size'] / (1024 * 1024)) / df_clean['avg_time'],
    np.nan
)

os.makedirs(PLOTS_DIR, exist_ok=True)

sns.set(style="whitegrid", palette="colorblind", font_scale=1.2)

# --- Plot 1: Emitting the whole file, scan vs seek ---
plt.figure(figsize=(12, 7))
whole_df = df_clean[df_clean['scenario'] == 'whole_file']
if not whole_df.empty:
    sns.lineplot(
        data=whole_df,
        x="file_size_MB",
        y="avg_time",
        hue="strategy",
        marker="o",
        linewidth=2.5
    )
    plt.title("Tail Performance - Emitting Entire File", fontsize=16)
    plt.xlabel("File Size (MB)", fontsize=14)
    plt.ylabel("Execution Time (seconds)", fontsize=14)
    plt.yscale("log")
    plt.xticks(sorted(df_clean['file_size_MB'].unique()))
    plt.legend(title="Strategy", fontsize=12, title_fontsize=13)
    plt.tight_layout()
    plt.savefig(os.path.join(PLOTS_DIR, "time_by_file_size.png"))
plt.close()

# --- Plot 2: Cost of skipping half the file ---
plt.figure(figsize=(12, 7))
skip_df = df_clean[df_clean['scenario'].isin(['skip_lines', 'skip_bytes'])]
if not skip_df.empty:
    sns.barplot(
        data=skip_df,
        x="file_size_MB",
        y="avg_time",
        hue="scenario",
        errorbar=None
    )
    plt.title("Skipping Half the File - Line Scan vs Byte Seek", fontsize=16)
    plt.xlabel("File Size (MB)", fontsize=14)
    plt.ylabel("Execution Time (seconds)", fontsize=14)
    plt.legend(title="Scenario", fontsize=12, title_fontsize=13)
    plt.tight_layout()
    plt.savefig(os.path.join(PLOTS_DIR, "skip_cost.png"))
plt.close()

# --- Plot 3: One plot per scenario ---
for scenario, scenario_df in df_clean.groupby('scenario'):
    plt.figure(figsize=(14, 8))
    sns.lineplot(
        data=scenario_df,
        x="file_size_MB",
        y="avg_time",
        hue="strategy",
        marker="o",
        linewidth=2.5
    )
    plt.title(f"Scenario - {scenario}", fontsize=16)
    plt.xlabel("File Size (MB)", fontsize=14)
    plt.ylabel("Execution Time (seconds)", fontsize=14)
    plt.yscale("log")
    plt.legend(title="Strategy", fontsize=12, title_fontsize=13)
    plt.tight_layout()
    plt.savefig(os.path.join(PLOTS_DIR, f"scenario_{scenario}.png"))
    plt.close()

# --- Plot 4: Throughput by scenario on the largest file ---
plt.figure(figsize=(14, 8))
largest_df = df_clean[df_clean['file_size_MB'] == df_clean['file_size_MB'].max()]
if not largest_df.empty:
    largest_df = largest_df.sort_values('throughput_MBps', ascending=False)
    sns.barplot(
        data=largest_df,
        x="scenario",
        y="throughput_MBps",
        hue="strategy",
        palette="viridis",
        errorbar=None
    )
    plt.title(f"Throughput - {largest_df['file_size_MB'].iloc[0]}MB File", fontsize=16)
    plt.xlabel("Scenario", fontsize=14)
    plt.ylabel("Throughput (MB/s)", fontsize=14)
    plt.legend(title="Strategy", fontsize=12, title_fontsize=13)
    plt.xticks(rotation=45)
    plt.tight_layout()
    plt.savefig(os.path.join(PLOTS_DIR, "throughput_comparison.png"))
plt.close()

# --- Summary table ---
print("\nPerformance Summary:")
print("-" * 80)

summary = df_clean.groupby(['strategy', 'scenario']).agg({
    'avg_time': ['mean', 'min', 'max'],
    'stdev': 'mean',
    'throughput_MBps': ['mean', 'max']
}).reset_index()

summary_file = os.path.join(RESULTS_DIR, "performance_summary.csv")
summary.to_csv(summary_file)
print(f"Summary saved to {summary_file}")

if not skip_df.empty:
    print("\nSkip Cost (seconds):")
    print("-" * 80)
    skip_summary = skip_df.pivot_table(
        index='file_size_MB',
        columns='scenario',
        values='avg_time',
        aggfunc='mean'
    )
    print(skip_summary)

print(f"\nAnalysis complete. Plots saved to {PLOTS_DIR}")
