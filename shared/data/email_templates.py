from shared.utils.enums import EmailTemplateType

_STYLE = """
    <style>
        body { font-family: Arial, sans-serif; line-height: 1.6; color: #333; }
        .container { max-width: 600px; margin: 0 auto; padding: 20px; }
        .header { background-color: %s; color: white; padding: 20px; text-align: center; }
        .content { background-color: #f8f9fa; padding: 20px; }
        .details { background-color: white; padding: 15px; margin: 15px 0; border-radius: 5px; }
        .button { display: inline-block; padding: 12px 25px; background-color: #28a745; color: white; text-decoration: none; border-radius: 5px; margin: 10px 5px; }
        .button.reject { background-color: #dc3545; }
        .footer { background-color: #6c757d; color: white; padding: 15px; text-align: center; font-size: 12px; }
    </style>"""


def _page(title: str, header_color: str, content: str) -> str:
    return f"""<!DOCTYPE html>
<html>
<head>
    <meta charset='utf-8'>
    <meta name='viewport' content='width=device-width, initial-scale=1'>
    <title>{title}</title>{_STYLE % header_color}
</head>
<body>
    <div class='container'>
        <div class='header'>
            <h1>{title}</h1>
        </div>
        <div class='content'>
{content}
        </div>
        <div class='footer'>
            <p>This is an automated message from the Visitor Management System.</p>
            <p>{{{{LocationName}}}} - Visitor Management</p>
        </div>
    </div>
</body>
</html>"""


STAFF_NOTIFICATION_BODY = _page("New Visitor Request", "#007bff", """
            <p>Dear {{StaffName}},</p>
            <p>You have a new visitor request that requires your attention.</p>
            <div class='details'>
                <h3>Visitor Information</h3>
                <p><strong>Name:</strong> {{VisitorName}}</p>
                <p><strong>Email:</strong> {{VisitorEmail}}</p>
                <p><strong>Phone:</strong> {{VisitorPhone}}</p>
                <p><strong>Company:</strong> {{CompanyName}}</p>
                <p><strong>Purpose of Visit:</strong> {{PurposeOfVisit}}</p>
                <p><strong>Requested Date & Time:</strong> {{VisitDateTime}}</p>
                <p><strong>Location:</strong> {{LocationName}}</p>
                {{#if IdProofType}}
                <p><strong>ID Proof:</strong> {{IdProofType}} {{IdProofNumber}}</p>
                {{/if}}
                {{#if Notes}}
                <p><strong>Additional Notes:</strong> {{Notes}}</p>
                {{/if}}
            </div>
            <div style='text-align: center; margin: 25px 0;'>
                <a href='{{ApprovalUrl}}' class='button'>Approve Visit</a>
                {{#if RejectUrl}}
                <a href='{{RejectUrl}}' class='button reject'>Reject Visit</a>
                {{/if}}
            </div>
            <p>Please review this request and take appropriate action as soon as possible.</p>""")

APPROVAL_BODY = _page("Your Visit Has Been Approved", "#28a745", """
            <p>Dear {{VisitorName}},</p>
            <p>Great news! Your visit request has been approved.</p>
            <div class='details'>
                <h3>Visit Details</h3>
                <p><strong>Date & Time:</strong> {{VisitDateTime}}</p>
                <p><strong>Location:</strong> {{LocationName}}</p>
                <p><strong>Meeting with:</strong> {{WhomToMeet}}</p>
                <p><strong>Approved by:</strong> {{ApprovedBy}}</p>
                <p><strong>Approved on:</strong> {{ApprovedAt}}</p>
                {{#if LocationAddress}}
                <p><strong>Address:</strong> {{LocationAddress}}</p>
                {{/if}}
            </div>
            <ul>
                <li>Please arrive on time for your scheduled visit</li>
                <li>Bring a valid photo ID for verification</li>
                <li>Report to the reception desk upon arrival</li>
            </ul>""")

REJECTION_BODY = _page("Visit Request Update", "#dc3545", """
            <p>Dear {{VisitorName}},</p>
            <p>We regret to inform you that your visit request for {{VisitDateTime}} requires attention.</p>
            <div class='details'>
                <h4>Reason:</h4>
                <p>{{RejectionReason}}</p>
            </div>
            <p>If you would like to reschedule or have any questions, please contact us at {{ContactInfo}}.</p>""")

RESCHEDULED_BODY = _page("Visit Rescheduled", "#ffc107", """
            <p>Dear {{VisitorName}},</p>
            <p>Your visit to {{LocationName}} with {{WhomToMeet}} needs to be rescheduled.</p>
            {{#if Notes}}
            <div class='details'>
                <p>{{Notes}}</p>
            </div>
            {{/if}}
            <p>Please contact us at {{ContactInfo}} to arrange a new time.</p>""")

CHECKIN_BODY = _page("Visitor Check-In Notification", "#17a2b8", """
            <p>Dear {{StaffName}},</p>
            <p>Your visitor has checked in and is ready to meet with you.</p>
            <div class='details'>
                <p><strong>Visitor:</strong> {{VisitorName}}</p>
                <p><strong>Check-In Time:</strong> {{CheckInTime}}</p>
                <p><strong>Location:</strong> {{LocationName}}</p>
                <p><strong>Purpose:</strong> {{PurposeOfVisit}}</p>
            </div>
            <p>Please proceed to the reception area to meet your visitor.</p>""")

CHECKOUT_BODY = _page("Visitor Check-Out Notification", "#6c757d", """
            <p>Dear {{StaffName}},</p>
            <p>Your visitor has checked out. Thank you for hosting them.</p>
            <div class='details'>
                <p><strong>Visitor:</strong> {{VisitorName}}</p>
                <p><strong>Check-Out Time:</strong> {{CheckOutTime}}</p>
                {{#if VisitDuration}}
                <p><strong>Total Visit Duration:</strong> {{VisitDuration}}</p>
                {{/if}}
                <p><strong>Location:</strong> {{LocationName}}</p>
            </div>""")


# type -> (name, subject, body)
DEFAULT_TEMPLATES = {
    EmailTemplateType.VISITOR_NOTIFICATION_TO_STAFF: (
        "Visitor Notification to Staff",
        "New Visitor Request - {{VisitorName}} wants to meet you",
        STAFF_NOTIFICATION_BODY,
    ),
    EmailTemplateType.VISITOR_APPROVAL_CONFIRMATION: (
        "Visitor Approval Confirmation",
        "Your visit to {{LocationName}} has been approved",
        APPROVAL_BODY,
    ),
    EmailTemplateType.VISITOR_REJECTION_NOTICE: (
        "Visitor Rejection Notice",
        "Your visit request to {{LocationName}} requires attention",
        REJECTION_BODY,
    ),
    EmailTemplateType.VISITOR_RESCHEDULED_NOTIFICATION: (
        "Visitor Rescheduled Notification",
        "Your visit to {{LocationName}} needs to be rescheduled",
        RESCHEDULED_BODY,
    ),
    EmailTemplateType.VISITOR_CHECKIN_NOTIFICATION: (
        "Visitor Check-In Notification",
        "{{VisitorName}} has checked in at {{LocationName}}",
        CHECKIN_BODY,
    ),
    EmailTemplateType.VISITOR_CHECKOUT_NOTIFICATION: (
        "Visitor Check-Out Notification",
        "{{VisitorName}} has checked out from {{LocationName}}",
        CHECKOUT_BODY,
    ),
}
