"""Dashboard aggregates over QC records."""
from datetime import date

from qc_tool.constants import PROJECTS
from qc_tool.services import permissions
from qc_tool.services.scoring import round1


def _mean(values):
    return round1(sum(values) / len(values)) if values else None


def filter_dashboard_records(records, actor, start=None, end=None, agents=None, project=None):
    today = date.today().isoformat()
    start = start or today
    end = end or today
    agents = agents or []
    result = []
    for r in records:
        if not permissions.can_view_record(actor, r):
            continue
        if not (start <= r['date'] <= end):
            continue
        if agents and r.get('agent_id') not in agents and r['agent_name'] not in agents:
            continue
        if project and project != 'All' and r['project_name'] != project:
            continue
        result.append(r)
    return result


def kpis(records):
    scores = [r['avg_score'] for r in records if not r.get('no_work')]
    return {
        'avg_score': _mean(scores) or 0.0,
        'active_projects_count': len({r['project_name'] for r in records}),
        'active_agents_count': len({r['agent_name'] for r in records}),
    }


def score_trend(records):
    """One point per date with each agent's mean score that day."""
    trend = []
    for day in sorted({r['date'] for r in records}):
        point = {'date': day}
        for agent in sorted({r['agent_name'] for r in records if r['date'] == day}):
            mean = _mean([r['avg_score'] for r in records
                          if r['date'] == day and r['agent_name'] == agent and not r.get('no_work')])
            if mean is not None:
                point[agent] = mean
        trend.append(point)
    return trend


def project_stats(records, projects=None):
    return [{
        'project_name': project,
        'active_agents': len({r['agent_name'] for r in records if r['project_name'] == project}),
    } for project in projects or PROJECTS]


def agent_project_performance(records, projects=None):
    data = []
    for agent in sorted({r['agent_name'] for r in records}):
        for project in projects or PROJECTS:
            mean = _mean([r['avg_score'] for r in records
                          if r['agent_name'] == agent and r['project_name'] == project
                          and not r.get('no_work')])
            if mean is not None:
                data.append({'name': f'{agent} - {project}', 'agent_name': agent,
                             'project_name': project, 'score': mean})
    return sorted(data, key=lambda d: d['score'], reverse=True)


def build_dashboard(records, actor, start=None, end=None, agents=None, project=None):
    filtered = filter_dashboard_records(records, actor, start, end, agents, project)
    return {
        'kpis': kpis(filtered),
        'score_trend': score_trend(filtered),
        'project_stats': project_stats(filtered),
        'agent_project_performance': agent_project_performance(filtered),
        'record_count': len(filtered),
    }
