#!/usr/bin/env python3
"""
Generate an HTML benchmark report for the tail strategies from the
benchmark CSV and the plots written by results/analyze_results.py.
"""

import os
import pandas as pd
import datetime
import platform

BENCH_DIR = os.path.dirname(os.path.abspath(__file__))
RESULTS_DIR = os.path.join(BENCH_DIR, "results")

STYLE = """
        body {
            font-family: Arial, sans-serif;
            line-height: 1.6;
            margin: 0;
            padding: 20px;
            color: #333;
        }
        h1, h2, h3 {
            color: #2c3e50;
        }
        .container {
            max-width: 1200px;
            margin: 0 auto;
        }
        table {
            border-collapse: collapse;
            width: 100%;
            margin-bottom: 20px;
        }
        th, td {
            border: 1px solid #ddd;
            padding: 8px;
            text-align: left;
        }
        th {
            background-color: #f2f2f2;
        }
        .plot-container {
            margin: 20px 0;
            text-align: center;
        }
        .plot-container img {
            max-width: 100%;
            height: auto;
        }
        .section {
            margin: 40px 0;
            border-top: 1px solid #eee;
            padding-top: 20px;
        }
        .highlight {
            background-color: #ffffcc;
        }
"""

def get_system_info():
    """Collect basic system information for the report."""
    info = {
        "OS": platform.system(),
        "OS Version": platform.release(),
        "Architecture": platform.machine(),
        "Python Version": platform.python_version(),
        "Date": datetime.datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
    }

    if platform.system() == "Linux":
        try:
            with open("/proc/cpuinfo") as f:
                for line in f:
                    if "model name" in line:
                        info["CPU"] = line.split(":", 1)[1].strip()
                        break
        except OSError:
            info["CPU"] = "Unknown"

    return info

def load_results(benchmark_csv):
    df = pd.read_csv(benchmark_csv)
    for column in ['avg_time', 'min_time', 'max_time', 'stdev']:
        df[column] = pd.to_numeric(df[column], errors='coerce')
    df = df.dropna(subset=['avg_time']).copy()
    positive = df['avg_time'] > 0
    df.loc[positive, 'throughput_MBps'] = (
        df.loc[positive, 'window_size'] / (1024 * 1024)
    ) / df.loc[positive, 'avg_time']
    return df

def write_skip_comparison(f, df):
    """Table of line-scan vs byte-seek time for skipping half the file."""
    skip = df[df['scenario'].isin(['skip_lines', 'skip_bytes'])]
    if skip.empty:
        return None

    pivot = skip.pivot_table(index='file_size_MB', columns='scenario', values='avg_time', aggfunc='mean')
    f.write("""
            <h3>Skipping Half the File</h3>
            <table>
                <tr><th>File Size (MB)</th><th>skip_lines (s)</th><th>skip_bytes (s)</th><th>Scan / Seek</th></tr>
    """)
    for file_size, row in pivot.iterrows():
        lines_time = row.get('skip_lines', float('nan'))
        bytes_time = row.get('skip_bytes', float('nan'))
        ratio = lines_time / bytes_time if bytes_time else float('nan')
        f.write(f"<tr><td>{file_size}</td><td>{lines_time:.6f}</td>"
                f"<td class='highlight'>{bytes_time:.6f}</td><td>{ratio:.2f}x</td></tr>\n")
    f.write("</table>\n")

    if {'skip_lines', 'skip_bytes'} <= set(pivot.columns):
        return (pivot['skip_lines'] / pivot['skip_bytes']).mean()
    return None

def generate_html_report():
    """Generate an HTML report with embedded images and data tables."""
    plots_dir = os.path.join(RESULTS_DIR, "plots")
    benchmark_csv = os.path.join(RESULTS_DIR, "benchmark_results.csv")
    output_report = os.path.join(RESULTS_DIR, "benchmark_report.html")

    if not os.path.exists(benchmark_csv):
        print(f"Error: Benchmark results not found at {benchmark_csv}")
        return False

    try:
        df_clean = load_results(benchmark_csv)
    except (OSError, ValueError, KeyError) as e:
        print(f"Error loading benchmark data: {e}")
        return False

    if os.path.isdir(plots_dir):
        plot_files = [name for name in os.listdir(plots_dir) if name.endswith('.png')]
    else:
        plot_files = []

    system_info = get_system_info()

    with open(output_report, 'w') as f:
        f.write(f"""<!DOCTYPE html>
<html>
<head>
    <title>Tail Benchmark Report</title>
    <style>{STYLE}    </style>
</head>
<body>
    <div class="container">
        <h1>Tail Benchmark Report</h1>
        <p>Generated on {system_info["Date"]}</p>

        <div class="section">
            <h2>System Information</h2>
            <table>
                <tr><th>Property</th><th>Value</th></tr>
""")
        for key, value in system_info.items():
            f.write(f"                <tr><td>{key}</td><td>{value}</td></tr>\n")

        f.write("""            </table>
        </div>

        <div class="section">
            <h2>Executive Summary</h2>
            <p>This report compares the two extraction strategies of tail: the line strategy,
            which scans forward to the start line, and the byte strategy, which seeks directly
            to the start offset.</p>
        """)

        summary = df_clean.groupby(['strategy', 'scenario']).agg({
            'avg_time': 'mean',
            'throughput_MBps': 'mean'
        }).reset_index()

        f.write("""
            <table>
                <tr>
                    <th>Strategy</th>
                    <th>Scenario</th>
                    <th>Avg. Time (s)</th>
                    <th>Throughput (MB/s)</th>
                </tr>
        """)
        for _, row in summary.iterrows():
            f.write(f"""
                <tr>
                    <td>{row['strategy']}</td>
                    <td>{row['scenario']}</td>
                    <td>{row['avg_time']:.6f}</td>
                    <td>{row['throughput_MBps']:.2f}</td>
                </tr>
            """)
        f.write("</table>\n")

        avg_ratio = write_skip_comparison(f, df_clean)

        f.write("""        </div>

        <div class="section">
            <h2>Benchmark Visualizations</h2>
        """)

        for plot_file in sorted(plot_files):
            plot_title = ' '.join(plot_file.replace('.png', '').replace('_', ' ').title().split())
            f.write(f"""
            <div class="plot-container">
                <h3>{plot_title}</h3>
                <img src="plots/{plot_file}" alt="{plot_title}">
            </div>
            """)

        f.write("""
        </div>

        <div class="section">
            <h2>Raw Benchmark Data</h2>
        """)

        max_rows = min(20, len(df_clean))
        f.write(df_clean.head(max_rows).to_html(index=False, float_format=lambda x: f"{x:.6f}"))
        if len(df_clean) > max_rows:
            f.write(f"<p>Showing {max_rows} rows out of {len(df_clean)} total. See the CSV file for complete data.</p>")

        f.write("""
        </div>

        <div class="section">
            <h2>Conclusions</h2>
            <ul>
        """)

        if avg_ratio is not None and avg_ratio == avg_ratio:
            f.write(f"<li>Starting halfway through a file, the line scan took on average "
                    f"<strong>{avg_ratio:.1f}x</strong> as long as the byte seek.</li>\n")

        whole = df_clean[df_clean['scenario'] == 'whole_file']
        if not whole.empty:
            fastest = whole.groupby('strategy')['avg_time'].mean().idxmin()
            f.write(f"<li>Emitting whole files was fastest with the <strong>{fastest}</strong> strategy.</li>\n")

        f.write("""
            </ul>
        </div>

        <div class="section">
            <p><em>Report generated automatically by the benchmark suite.</em></p>
        </div>
    </div>
</body>
</html>
""")

    print(f"Report generated successfully: {output_report}")
    return True

def main():
    """Main function to generate the report."""
    if not generate_html_report():
        print("Failed to generate report. Please run run_bench.py first.")
        return 1
    return 0

if __name__ == "__main__":
    exit(main())
