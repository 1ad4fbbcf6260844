import csv
import io

CSV_HEADERS = ['Date', 'Time Slot', 'Agent', 'Project', 'QC Checker', 'Score',
               'Original Score', 'Rework', 'Task', 'Notes']


def records_to_csv(records):
    """Render QC records as CSV text. No-work audits show ``N/A`` scores."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator='\n')
    writer.writerow(CSV_HEADERS)
    for r in records:
        writer.writerow([
            r['date'], r['time_slot'], r['agent_name'], r['project_name'],
            r.get('qc_checker_name', ''),
            'N/A' if r.get('no_work') else r['avg_score'],
            'N/A' if r.get('no_work') else r.get('original_score'),
            'Yes' if r.get('rework_status') else 'No',
            r.get('task_name', ''), r.get('notes', ''),
        ])
    return buffer.getvalue()
