# main.py
from flask import Flask, request, render_template_string, jsonify
import logging, os

from bodyfat import (
    IDLE_MESSAGE,
    EstimationResult,
    InputError,
    Sex,
    Status,
    calculate,
)

# -------- Config (environment) --------
HOST = os.environ.get("HOST", "0.0.0.0")
PORT = int(os.environ.get("PORT", 8080))
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

FIELDS = ("weight", "height", "waist", "neck", "hip", "age")

LABELS = {
    "weight": ("Weight (kg)", "e.g., 75.0"),
    "height": ("Height (cm)", "e.g., 170.0"),
    "waist": ("Waist (cm)", "e.g., 80.0"),
    "neck": ("Neck (cm)", "e.g., 35.0"),
    "hip": ("Hip (cm)", "e.g., 90.0 (for females)"),
    "age": ("Age (years)", "e.g., 30"),
}

app = Flask(__name__)

PAGE = """
<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <title>Body Fat Calculator</title>
  <style>
    :root { --muted: #9fb0c3; --text: #e9eef5; --danger: #ff6b6b; --ok: #2ecc71; --line: #1f2a3a; }
    * { box-sizing: border-box; }
    body { margin: 0; font-family: system-ui, Arial, sans-serif; background: #0b0f14; color: var(--text); }
    .wrap { max-width: 720px; margin: 40px auto; padding: 24px; background: #121822; border: 1px solid var(--line); border-radius: 16px; }
    h1 { margin: 0 0 8px 0; }
    h2 { font-size: 14px; letter-spacing: .08em; color: var(--muted); margin: 20px 0 10px; }
    p.muted, .label, .status { color: var(--muted); }
    .grid { display: grid; grid-template-columns: 1fr 1fr; gap: 12px; }
    .wide { grid-column: 1 / -1; }
    .label { font-size: 12px; margin-bottom: 6px; display: block; }
    input[type="text"] { width: 100%; font-size: 16px; padding: 10px; border-radius: 8px; border: 1px solid var(--line); background: #0f1622; color: var(--text); }
    input.bad { border-color: var(--danger); }
    button { padding: 10px 16px; margin-right: 8px; border-radius: 8px; border: 1px solid var(--line); background: #1c3454; color: var(--text); cursor: pointer; }
    .result { text-align: center; }
    .pct { font-size: 40px; font-weight: 800; color: var(--muted); }
    .pct.ok { color: var(--ok); }
    .status { font-size: 13px; }
    .status.failure { color: var(--danger); }
    @media (max-width: 700px){ .grid { grid-template-columns: 1fr; } }
  </style>
</head>
<body>
  <div class="wrap">
    <div>
      <h1>Body Fat Calculator</h1>
      <p class="muted">U.S. Navy circumference method. Metric inputs; converted to inches under the hood.</p>

      <form id="calcForm" method="POST" novalidate>
        <h2>BODY INFORMATION</h2>
        <div class="grid">
          <div class="wide">
            <span class="label">Sex</span>
            <div>
              <label><input type="radio" name="sex" value="male" {% if sex == 'male' %}checked{% endif %}> Male</label>
              <label><input type="radio" name="sex" value="female" {% if sex == 'female' %}checked{% endif %}> Female</label>
            </div>
          </div>

          {% for name in fields %}
          <div id="{{ name }}_box" {% if name == 'hip' and sex != 'female' %}style="display:none"{% endif %}>
            <label class="label" for="{{ name }}">{{ labels[name][0] }}</label>
            <input type="text" id="{{ name }}" name="{{ name }}" inputmode="decimal" autocomplete="off"
                   placeholder="{{ labels[name][1] }}" value="{{ form[name] }}"
                   {% if bad_field == name %}class="bad"{% endif %}>
          </div>
          {% endfor %}

          <div class="wide">
            <button type="submit">Calculate</button>
            <button type="button" id="resetBtn">Reset</button>
          </div>
        </div>
      </form>

      <h2>RESULTS</h2>
      <div class="result" id="result">
        <div class="status">Estimated Body Fat:</div>
        <div class="pct {% if result.ok %}ok{% endif %}" id="pct">{{ result.display }}%</div>
        <div class="status {{ result.status.value }}" id="status">{{ result.message }}</div>
      </div>
    </div>
  </div>

  <script>
    const idleMessage = {{ idle_message|tojson }};

    function toggleHip(){
      const sex = document.querySelector('input[name="sex"]:checked')?.value || 'male';
      document.getElementById('hip_box').style.display = (sex === 'female') ? '' : 'none';
    }

    function wire(){
      document.querySelectorAll('input[name="sex"]').forEach(r => r.addEventListener('change', toggleHip));

      document.querySelectorAll('input[type="text"]').forEach(inp => {
        inp.addEventListener('input', () => inp.classList.remove('bad'));
      });

      document.getElementById('resetBtn').addEventListener('click', function(){
        document.querySelectorAll('input[type="text"]').forEach(el => { el.value = ''; el.classList.remove('bad'); });
        document.querySelector('input[name="sex"][value="male"]').checked = true;
        const pct = document.getElementById('pct');
        pct.textContent = '0.0%';
        pct.classList.remove('ok');
        const status = document.getElementById('status');
        status.textContent = idleMessage;
        status.className = 'status neutral';
        toggleHip();
      });
    }

    wire();
  </script>
</body>
</html>
"""


def log_level(name):
    # unknown names fall back to INFO
    level = logging.getLevelName(str(name).strip().upper())
    return level if isinstance(level, int) else logging.INFO


def render_page(form, sex, result):
    return render_template_string(
        PAGE,
        form=form,
        sex=sex.value,
        result=result,
        bad_field=result.field,
        fields=FIELDS,
        labels=LABELS,
        idle_message=IDLE_MESSAGE,
    )


@app.route("/", methods=["GET", "POST"])
def index():
    form = {name: request.form.get(name, "") for name in FIELDS}
    sex = Sex.from_form(request.form.get("sex"))

    if request.method == "GET":
        return render_page(form, sex, EstimationResult())

    result = calculate(sex=sex, **form)
    if not result.ok:
        app.logger.info("calculation rejected: %s", result.error.name)
    return render_page(form, sex, result)


@app.route("/api/estimate", methods=["POST"])
def api_estimate():
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        err = InputError.GENERIC_INVALID_INPUT
        app.logger.info("api request rejected: body is not a JSON object")
        return jsonify(ok=False, error=err.name, field=err.field, message=err.message), 400

    sex = Sex.from_form(payload.get("sex"))
    result = calculate(sex=sex, **{name: payload.get(name, "") for name in FIELDS})
    if not result.ok:
        app.logger.info("api calculation rejected: %s", result.error.name)
        return jsonify(
            ok=False,
            error=result.error.name,
            field=result.field,
            message=result.error.message,
            status_message=result.message,
            status=Status.FAILURE.value,
        ), 422

    return jsonify(
        ok=True,
        sex=sex.value,
        body_fat=round(result.percentage, 1),
        display=result.display,
        message=result.message,
        status=result.status.value,
    )


if __name__ == "__main__":
    logging.basicConfig(level=log_level(LOG_LEVEL), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app.run(host=HOST, port=PORT)
