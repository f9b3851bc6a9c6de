"""
Confirmation email template.

Fixed welcome document sent to every registrant. Placeholders use
string.Template syntax so the embedded CSS braces need no escaping.
"""

import html
from string import Template

SENDER_NAME = "Tek School"
SUBJECT = "Welcome to Tek School - Registration Confirmed! 🎓"
CONTACT_ADDRESS = "itekschool@gmail.com"

_WELCOME_HTML = Template(
    """
<!DOCTYPE html>
<html>
  <head>
    <meta charset="UTF-8">
    <style>
      body {
        font-family: Arial, sans-serif;
        line-height: 1.6;
        color: #333;
        max-width: 600px;
        margin: 0 auto;
        padding: 20px;
      }
      .header {
        background: linear-gradient(135deg, #667eea 0%, #764ba2 100%);
        color: white;
        padding: 40px;
        text-align: center;
        border-radius: 10px 10px 0 0;
      }
      .content {
        background: #f9f9f9;
        padding: 30px;
        border-radius: 0 0 10px 10px;
      }
      .details {
        background: white;
        padding: 25px;
        border-left: 4px solid #667eea;
        margin: 20px 0;
        border-radius: 5px;
      }
      .detail-item {
        padding: 10px 0;
        border-bottom: 1px solid #eee;
      }
      .detail-item:last-child {
        border-bottom: none;
      }
      .footer {
        text-align: center;
        margin-top: 30px;
        color: #666;
        font-size: 14px;
      }
    </style>
  </head>
  <body>
    <div class="header">
      <h1 style="margin: 0; font-size: 28px;">Welcome to Tek School! 🎓</h1>
      <p style="margin: 10px 0 0 0; font-size: 16px;">Your Tech Journey Starts Here</p>
    </div>

    <div class="content">
      <p>Hello <strong>$name</strong>,</p>

      <p>Thank you for registering with Tek School! We're thrilled to have you on board and excited to be part of your tech journey.</p>

      <div class="details">
        <h2 style="color: #667eea; margin-top: 0;">Your Registration Details</h2>
        <div class="detail-item">
          <strong>Name:</strong> $name
        </div>
        <div class="detail-item">
          <strong>Email:</strong> $email
        </div>
        <div class="detail-item">
          <strong>Phone:</strong> $phone
        </div>
        <div class="detail-item">
          <strong>Selected Program:</strong> $program
        </div>
      </div>

      <p style="background: #fff8e1; padding: 20px; border-left: 4px solid #ffc107; border-radius: 5px;">
        <strong style="color: #f57c00;">What's Next?</strong><br>
        Our team will contact you within <strong>24-48 hours</strong> to discuss your tech journey, answer your questions, and guide you through the enrollment process.
      </p>

      <p style="text-align: center; margin-top: 30px;">
        <a href="#" style="background: linear-gradient(135deg, #667eea 0%, #764ba2 100%); color: white; text-decoration: none; padding: 15px 40px; border-radius: 50px; display: inline-block; font-weight: bold;">
          Explore Our Programs
        </a>
      </p>
    </div>

    <div class="footer">
      <p><strong>Best regards,</strong><br>Tek School Team</p>
      <p>📧 <a href="mailto:$contact" style="color: #667eea;">$contact</a></p>
    </div>
  </body>
</html>
"""
)


def render_welcome(
    name: str, email: str, phone: str, program: str, escape: bool = False
) -> str:
    """
    Render the welcome document for one registrant.

    Values are inserted verbatim unless ``escape`` is set, in which case
    they are HTML-escaped first.
    """
    fields = {"name": name, "email": email, "phone": phone, "program": program}
    if escape:
        fields = {key: html.escape(value) for key, value in fields.items()}
    # substitute() is single-pass, so "$" inside a value is never re-expanded
    return _WELCOME_HTML.substitute(fields, contact=CONTACT_ADDRESS)
