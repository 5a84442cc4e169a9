import pandas as pd
import plotly.graph_objects as go


def value_column(frame: pd.DataFrame) -> str:
    """
    Picks the column to chart: the last numeric column of the report.
    """
    numeric = frame.select_dtypes(include='number').columns
    if len(numeric) == 0:
        raise ValueError("Report has no numeric column to plot")
    return numeric[-1]


def build_figure(frame: pd.DataFrame, title: str) -> go.Figure:
    """
    Creates a bar chart of a report result.

    Args:
        frame: A report DataFrame. Its first column labels the bars.
        title: Chart title.

    Returns:
        The plotly Figure.
    """
    column = value_column(frame)
    labels = frame.iloc[:, 0].astype(str)
    fig = go.Figure()

    fig.add_trace(go.Bar(
        x=labels,
        y=frame[column],
        name=column.replace('_', ' ').title(),
        marker_color='indianred'
    ))

    fig.update_layout(
        title_text=f'<b>{title}</b>',
        xaxis_title=frame.columns[0].replace('_', ' ').title(),
        yaxis_title=column.replace('_', ' ').title(),
        xaxis=dict(type='category'),
        template='plotly_white'
    )
    return fig


def plot_report(frame: pd.DataFrame, title: str, output_path: str) -> None:
    """
    Creates and saves an interactive bar chart of a report result.

    Args:
        frame: A report DataFrame.
        title: Chart title.
        output_path: Path to save the HTML file for the plot.
    """
    print(f"Generating '{title}' plot...")
    fig = build_figure(frame, title)
    fig.write_html(output_path)
    print(f"Saved plot to {output_path}")
