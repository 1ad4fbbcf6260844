from flask import Blueprint, request, g
from qc_tool.services.analytics import build_dashboard
from qc_tool.middleware.auth_middleware import token_required
from qc_tool.utils.responses import success_response

dashboard_bp = Blueprint('dashboard', __name__)


@dashboard_bp.route('/dashboard', methods=['GET'])
@token_required
def get_dashboard():
    data = build_dashboard(
        g.store.get_records(), g.current_user,
        start=request.args.get('start_date'),
        end=request.args.get('end_date'),
        agents=request.args.getlist('agent'),
        project=request.args.get('project'),
    )
    return success_response(data=data)
