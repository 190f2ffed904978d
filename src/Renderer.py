import logging
from typing import Optional

import plotly.graph_objects as go
from plotly.subplots import make_subplots

from Models import DashboardData, PersonStats, ProjectStats
from Ranking import completion_band

logger = logging.getLogger(__name__)

HOURS_COLOR = "#3b82f6"
COMPLETED_COLOR = "#10b981"
ESTIMATE_COLOR = "#f59e0b"
CAPACITY_COLOR = "#8b5cf6"
LIMIT_COLOR = "#ef4444"
BAND_COLORS = {"good": "#16a34a", "fair": "#ca8a04", "poor": "#dc2626"}

PERSON_LABEL_LEN = 15
PROJECT_LABEL_LEN = 20
EXPORT_FORMATS = ("html", "png", "pdf")


def shorten(name: str, limit: int) -> str:
    return name[:limit] + "..." if len(name) > limit else name


class DashboardRenderer:
    """
    Builds the Plotly charts of the productivity dashboard.

    Each chart method takes the finalized stats and returns a ``go.Figure``,
    or None when there is nothing to draw. The last rendered set of figures is
    kept so it can be exported afterwards.
    """
    def __init__(self, height: int = 420):
        """Initializes the renderer with an empty figure set."""
        self.height = height
        self.current_figs = {}

    def _apply_layout(self, fig, title, y_title=""):
        """
        Shared axis and legend styling.

        Args:
            fig (go.Figure): The figure to style.
            title (str): Chart title.
            y_title (str): Y-axis label.
        """
        fig.update_xaxes(tickangle=-45, showgrid=False)
        fig.update_yaxes(title_text=y_title, showgrid=True, gridcolor='lightgray', zeroline=False)
        fig.update_layout(
            title=title,
            height=self.height,
            margin=dict(l=10, r=10, t=60, b=10),
            barmode='group',
            legend=dict(
                orientation="h",
                xanchor="right", x=0.995,
                yanchor="bottom", y=1.02,
                bordercolor="Black",
                borderwidth=1
            ),
            hovermode='closest'
        )

    def person_activity_chart(self, people: list[PersonStats], title: str = "Atividades por Pessoa") -> Optional[go.Figure]:
        """
        Hours and completed tasks per person.

        Args:
            people (list[PersonStats]): People in display order.
            title (str): Chart title.

        Returns:
            go.Figure: The chart, or None if there are no people.
        """
        if not people:
            return None
        names = [shorten(p.name, PERSON_LABEL_LEN) for p in people]

        fig = go.Figure()
        fig.add_trace(go.Bar(name="Horas Totais", x=names, y=[round(p.totalHours, 2) for p in people],
                             marker=dict(color=HOURS_COLOR)))
        fig.add_trace(go.Bar(name="Tarefas Completas", x=names, y=[p.tasksCompleted for p in people],
                             marker=dict(color=COMPLETED_COLOR)))
        self._apply_layout(fig, title)
        return fig

    def capacity_chart(self, people: list[PersonStats], sprint_days: int = 15) -> Optional[go.Figure]:
        """
        Capacity usage per person with a reference line at 100%.

        Args:
            people (list[PersonStats]): People in display order.
            sprint_days (int): Sprint length, only used for the subtitle.
        """
        if not people:
            return None
        names = [shorten(p.name, PERSON_LABEL_LEN) for p in people]

        fig = go.Figure(go.Bar(
            name="Uso de Capacidade (%)",
            x=names,
            y=[round(p.capacityUsage, 1) for p in people],
            marker=dict(color=CAPACITY_COLOR),
            customdata=[[p.totalHours, "sim" if p.isIntern else "não"] for p in people],
            hovertemplate=(
                "<b>%{x}</b><br>" +
                "Uso: %{y}%<br>" +
                "Horas: %{customdata[0]:.1f}h<br>" +
                "Estagiário: %{customdata[1]}" +
                "<extra></extra>"
            ),
        ))
        fig.add_hline(y=100, line_dash="dash", line_color=LIMIT_COLOR, annotation_text="100%")
        self._apply_layout(fig, f"Capacidade vs Real (100% = 80h por sprint de {sprint_days} dias)", "% Capacidade")
        return fig

    def estimated_vs_actual_chart(self, people: list[PersonStats],
                                  title: str = "Tempo Estimado vs Realizado") -> Optional[go.Figure]:
        """Only people with an estimate are drawn."""
        people = [p for p in people if p.estimatedHours > 0]
        if not people:
            return None
        names = [shorten(p.name, PERSON_LABEL_LEN) for p in people]

        fig = go.Figure()
        fig.add_trace(go.Bar(name="Horas Estimadas", x=names, y=[round(p.estimatedHours, 2) for p in people],
                             marker=dict(color=ESTIMATE_COLOR)))
        fig.add_trace(go.Bar(name="Horas Reais", x=names, y=[round(p.totalHours, 2) for p in people],
                             marker=dict(color=HOURS_COLOR)))
        self._apply_layout(fig, title, "Horas")
        return fig

    def project_completion_chart(self, projects: list[ProjectStats]) -> Optional[go.Figure]:
        if not projects:
            return None
        names = [shorten(p.name, PROJECT_LABEL_LEN) for p in projects]
        colors = [BAND_COLORS[completion_band(p.completionPercentage)] for p in projects]

        fig = go.Figure(go.Bar(
            name="Conclusão (%)",
            x=names,
            y=[round(p.completionPercentage, 1) for p in projects],
            marker=dict(color=colors),
            customdata=[[p.completedTasks, p.totalTasks] for p in projects],
            hovertemplate="<b>%{x}</b><br>%{y}% (%{customdata[0]}/%{customdata[1]})<extra></extra>",
        ))
        self._apply_layout(fig, "Conclusão por Projeto", "% Conclusão")
        fig.update_yaxes(range=[0, 100])
        return fig

    def render(self, data: DashboardData, sprint_days: int = 15) -> dict:
        """
        Main entry point. Builds every chart that has data.

        Args:
            data (DashboardData): Aggregated dashboard.
            sprint_days (int): Sprint length the capacity was computed for.

        Returns:
            dict: Chart key to ``go.Figure``; charts without data are left out.
        """
        figs = {
            "activity": self.person_activity_chart(data.personStats),
            "capacity": self.capacity_chart(data.personStats, sprint_days),
            "estimates": self.estimated_vs_actual_chart(data.personStats),
            "projects": self.project_completion_chart(data.projectStats),
        }
        self.current_figs = {k: f for k, f in figs.items() if f is not None}
        return self.current_figs

    def to_html(self, figs: Optional[dict] = None, include_plotlyjs="cdn") -> str:
        """Concatenates the figures into one HTML page."""
        figs = self.current_figs if figs is None else figs
        parts = []
        for i, fig in enumerate(figs.values()):
            parts.append(fig.to_html(full_html=False, include_plotlyjs=include_plotlyjs if i == 0 else False))
        return "<html><head><meta charset='utf-8'></head><body>" + "\n".join(parts) + "</body></html>"

    def combined_figure(self, figs: Optional[dict] = None) -> go.Figure:
        """
        Stacks the charts into one figure, one row per chart.

        Args:
            figs (dict, optional): Charts to stack, defaults to the last rendered set.

        Returns:
            go.Figure: A single figure holding every chart's traces.
        """
        figs = self.current_figs if figs is None else figs
        titles = [fig.layout.title.text or "" for fig in figs.values()]

        combined = make_subplots(
            rows=len(figs), cols=1,
            vertical_spacing=0.3 / len(figs),
            subplot_titles=titles
        )
        for row, fig in enumerate(figs.values(), start=1):
            for trace in fig.data:
                combined.add_trace(trace, row=row, col=1)
            # reference lines are the only shapes the charts draw
            for shape in fig.layout.shapes:
                combined.add_hline(y=shape.y0, line=shape.line, row=row, col=1)
            combined.update_yaxes(title_text=fig.layout.yaxis.title.text, range=fig.layout.yaxis.range,
                                  showgrid=True, gridcolor='lightgray', row=row, col=1)
            combined.update_xaxes(tickangle=-45, row=row, col=1)

        combined.update_layout(
            height=self.height * len(figs),
            margin=dict(l=10, r=10, t=60, b=10),
            barmode='group',
            showlegend=True
        )
        return combined

    def export(self, path: str, fmt: str, key: Optional[str] = None):
        """
        Writes the current charts to disk.

        HTML holds every chart on one page. PNG and PDF hold the whole
        dashboard stacked into one figure, or only the ``key`` chart.

        Args:
            path (str): Destination file.
            fmt (str): 'html', 'png' or 'pdf'.
            key (str, optional): Single chart to export for image formats.
        """
        if fmt not in EXPORT_FORMATS:
            raise ValueError(f"Unsupported export format: {fmt}")
        if not self.current_figs:
            raise ValueError("There is no chart to export")
        if key is not None and key not in self.current_figs:
            raise ValueError(f"Unknown chart: {key}")

        if fmt == 'html':
            with open(path, "w", encoding="utf-8") as f:
                f.write(self.to_html())
        else:
            fig = self.current_figs[key] if key else self.combined_figure()
            if fmt == 'png':
                fig.write_image(path, scale=2)
            else:
                fig.write_image(path)
        logger.info("Exported dashboard to %s (%s)", path, fmt)
