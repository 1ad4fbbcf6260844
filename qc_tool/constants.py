"""Static reference data for the QC tool."""

ROLE_ADMIN = 'ADMIN'
ROLE_MANAGER = 'MANAGER'
ROLE_QC_AGENT = 'QC_AGENT'
ROLE_AGENT = 'AGENT'
ROLES = (ROLE_ADMIN, ROLE_MANAGER, ROLE_QC_AGENT, ROLE_AGENT)

REVIEW_PENDING = 'PENDING'
REVIEW_ACKNOWLEDGED = 'ACKNOWLEDGED'
REVIEW_DISPUTED = 'DISPUTED'
REVIEW_STATUSES = (REVIEW_PENDING, REVIEW_ACKNOWLEDGED, REVIEW_DISPUTED)

# Persisted collection keys
KEY_USERS = 'qc_tool_users'
KEY_RECORDS = 'qc_tool_records'
KEY_PRODUCTION = 'qc_tool_production_records'
KEY_CURRENT_USER = 'qc_tool_current_user'

INITIAL_USERS = [
    {'id': 'u1', 'name': 'Mohsin', 'role': ROLE_MANAGER},
    {'id': 'u2', 'name': 'Venkateshwaran', 'role': ROLE_MANAGER},
    {'id': 'u3', 'name': 'Jimil', 'role': ROLE_QC_AGENT},
    {'id': 'u4', 'name': 'Apurva', 'role': ROLE_QC_AGENT},
    {'id': 'u5', 'name': 'Jash', 'role': ROLE_AGENT},
    {'id': 'u6', 'name': 'Chaitanya', 'role': ROLE_AGENT},
    {'id': 'u7', 'name': 'Priyanshu', 'role': ROLE_AGENT},
    {'id': 'u8', 'name': 'Vivek', 'role': ROLE_AGENT},
    {'id': 'u9', 'name': 'Manas', 'role': ROLE_AGENT},
    {'id': 'u10', 'name': 'Admin User', 'role': ROLE_ADMIN},
]

PROJECTS = ['Moveeasy', 'Mfund', 'Altrum']

TRACKER_PROJECTS = [
    {'name': 'Altrum- Bi (V1)', 'target': 13},
    {'name': 'Altrum- Bi (V2)', 'target': 22},
    {'name': 'Altrum- Bi (V3)', 'target': 1},
    {'name': 'Rex-Stand', 'target': 31},
    {'name': 'Training', 'target': 0},
    {'name': 'Rex-Logo S', 'target': 16},
]

TIME_SLOTS = ['12 PM', '4 PM', '6 PM']

QC_ERRORS = [
    {'id': 'fmt1', 'name': 'Typo / Grammar Error', 'category': 'FORMATTING', 'weight': -5},
    {'id': 'fmt2', 'name': 'Incorrect Spacing', 'category': 'FORMATTING', 'weight': -2},
    {'id': 'fmt3', 'name': 'Wrong Font / Style', 'category': 'FORMATTING', 'weight': -2},
    {'id': 'adh1', 'name': 'Process Violation', 'category': 'ADHERENCE', 'weight': -10},
    {'id': 'adh2', 'name': 'Critical Data Mismatch', 'category': 'ADHERENCE', 'weight': 0},
    {'id': 'ftl1', 'name': 'Missed Client Instruction', 'category': 'FATAL', 'weight': -15},
    {'id': 'src1', 'name': 'Invalid Source Link', 'category': 'SOURCE', 'weight': -10},
    {'id': 'src2', 'name': 'Source Date Outdated', 'category': 'SOURCE', 'weight': -5},
]
QC_ERROR_WEIGHTS = {e['id']: e['weight'] for e in QC_ERRORS}

SAMPLING_RATE = 0.1
MAX_SCORE = 100
PRODUCTION_CAP_MULTIPLIER = 2

# Navigation views and the roles allowed to open them
VIEW_ROLES = {
    'Dashboard': (ROLE_ADMIN, ROLE_MANAGER, ROLE_QC_AGENT, ROLE_AGENT),
    'Qc form': (ROLE_ADMIN, ROLE_MANAGER, ROLE_QC_AGENT),
    'Report table': (ROLE_ADMIN, ROLE_MANAGER, ROLE_QC_AGENT, ROLE_AGENT),
    'Production Tracker': (ROLE_ADMIN, ROLE_MANAGER, ROLE_QC_AGENT, ROLE_AGENT),
    'Admin': (ROLE_ADMIN,),
}
