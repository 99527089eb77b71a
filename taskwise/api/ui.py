"""Single-page web UI served at GET /.

Plain HTML and inline JavaScript against the JSON API; chat history lives
only in the page.
"""

INDEX_HTML = """
<!DOCTYPE html>
<html>
<head>
    <title>TaskWise</title>
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <style>
        body { font-family: Arial, sans-serif; max-width: 960px; margin: 30px auto; padding: 20px; color: #222; }
        nav button { padding: 8px 16px; margin-right: 5px; cursor: pointer; }
        nav button.active { background: #333; color: #fff; }
        button { padding: 6px 12px; margin: 2px; cursor: pointer; }
        .section { margin: 20px 0; padding: 15px; border: 1px solid #ddd; border-radius: 5px; }
        .hidden { display: none; }
        table { width: 100%; border-collapse: collapse; margin-top: 10px; }
        th, td { padding: 8px; text-align: left; border-bottom: 1px solid #ddd; vertical-align: top; }
        th { background-color: #f2f2f2; }
        label { display: block; margin-top: 8px; font-size: 0.9em; color: #555; }
        input, textarea, select { width: 100%; padding: 6px; box-sizing: border-box; }
        .toast { position: fixed; bottom: 20px; right: 20px; background: #333; color: #fff; padding: 10px 16px; border-radius: 4px; }
        .error-panel { background: #fdecea; border: 1px solid #f5c2c0; color: #8a1f11; padding: 10px; border-radius: 4px; }
        .calendar { display: grid; grid-template-columns: repeat(7, 1fr); gap: 4px; }
        .calendar .day { min-height: 70px; border: 1px solid #eee; padding: 4px; font-size: 0.8em; }
        .calendar .day .num { color: #999; }
        .calendar .event { background: #e3f2fd; margin-top: 2px; padding: 2px; border-radius: 3px; overflow: hidden; white-space: nowrap; text-overflow: ellipsis; }
        .chat-log { max-height: 300px; overflow-y: auto; border: 1px solid #eee; padding: 8px; margin-bottom: 8px; }
        .chat-log .user { text-align: right; color: #1565c0; }
        .chat-log .assistant { white-space: pre-wrap; }
        .done { text-decoration: line-through; color: #999; }
    </style>
</head>
<body>
    <h1>TaskWise</h1>
    <nav>
        <button data-view="tasks" class="active">Tasks</button>
        <button data-view="new">New Task</button>
        <button data-view="calendar">Calendar</button>
        <button data-view="report">Report</button>
        <button data-view="chat">Chat</button>
    </nav>

    <div id="view-tasks" class="section">
        <h2>Active</h2>
        <table id="active-tasks"></table>
        <h2>Completed</h2>
        <table id="completed-tasks"></table>
    </div>

    <div id="view-new" class="section hidden">
        <h2>New Task</h2>
        <label for="idea">Describe the task in your own words</label>
        <textarea id="idea" rows="2"></textarea>
        <button id="suggest-btn">Suggest with AI</button>
        <form id="task-form">
            <label for="title">Title</label>
            <input id="title" name="title">
            <label for="description">Description</label>
            <textarea id="description" name="description" rows="4"></textarea>
            <label for="priority">Priority</label>
            <select id="priority" name="priority">
                <option>LOW</option><option selected>MEDIUM</option><option>HIGH</option><option>URGENT</option>
            </select>
            <label for="timeEstimate">Time estimate (minutes)</label>
            <input id="timeEstimate" name="timeEstimate" type="number" min="1" value="30">
            <label for="dueDate">Due date</label>
            <input id="dueDate" name="dueDate" type="datetime-local">
            <button type="submit">Create Task</button>
        </form>
    </div>

    <div id="view-calendar" class="section hidden">
        <h2 id="calendar-title"></h2>
        <button id="prev-month">&lt;</button><button id="next-month">&gt;</button>
        <div id="calendar" class="calendar"></div>
    </div>

    <div id="view-report" class="section hidden">
        <h2>Productivity Report</h2>
        <button id="report-btn">Generate Report</button>
        <div id="report"></div>
    </div>

    <div id="view-chat" class="section hidden">
        <h2>Ask about your tasks</h2>
        <div id="chat-log" class="chat-log"></div>
        <form id="chat-form">
            <input id="question" placeholder="How many tasks did I complete this week?">
            <button type="submit">Ask</button>
        </form>
    </div>

    <div id="toast" class="toast hidden"></div>

    <script>
        let calendarMonth = new Date();
        calendarMonth.setDate(1);

        function escapeHtml(text) {
            const div = document.createElement('div');
            div.textContent = text == null ? '' : String(text);
            return div.innerHTML;
        }

        function toast(message) {
            const el = document.getElementById('toast');
            el.textContent = message;
            el.classList.remove('hidden');
            setTimeout(() => el.classList.add('hidden'), 4000);
        }

        async function api(path, options) {
            const response = await fetch(path, options);
            if (response.status === 204) {
                return null;
            }
            const data = await response.json();
            if (!response.ok) {
                throw new Error(data.error || response.statusText);
            }
            return data;
        }

        function showView(name) {
            document.querySelectorAll('nav button').forEach(b => b.classList.toggle('active', b.dataset.view === name));
            document.querySelectorAll('[id^="view-"]').forEach(v => v.classList.toggle('hidden', v.id !== 'view-' + name));
            if (name === 'tasks') loadTasks();
            if (name === 'calendar') loadCalendar();
        }

        async function loadTasks() {
            try {
                const tasks = await api('/tasks');
                const header = '<tr><th>Title</th><th>Priority</th><th>Estimate</th><th>Due</th><th></th></tr>';
                let active = header, completed = header;
                tasks.forEach(task => {
                    const due = task.dueDate ? new Date(task.dueDate).toLocaleString() : '';
                    const done = task.status === 'COMPLETED';
                    const row = `<tr>
                        <td class="${done ? 'done' : ''}">${escapeHtml(task.title)}<br><small>${escapeHtml(task.description || '')}</small></td>
                        <td>${task.priority}</td>
                        <td>${task.timeEstimate} min</td>
                        <td>${due}</td>
                        <td>
                            ${done ? '' : `<button onclick="completeTask('${task.id}')">Complete</button>`}
                            <button onclick="deleteTask('${task.id}')">Delete</button>
                        </td>
                    </tr>`;
                    if (done) { completed += row; } else { active += row; }
                });
                document.getElementById('active-tasks').innerHTML = active;
                document.getElementById('completed-tasks').innerHTML = completed;
            } catch (error) {
                toast('Error: ' + error.message);
            }
        }

        async function completeTask(id) {
            try {
                await api(`/tasks/${id}`, {
                    method: 'PATCH',
                    headers: { 'Content-Type': 'application/json' },
                    body: JSON.stringify({ status: 'COMPLETED' })
                });
                loadTasks();
            } catch (error) {
                toast('Error: ' + error.message);
            }
        }

        async function deleteTask(id) {
            if (!confirm('Delete this task?')) return;
            try {
                await api(`/tasks/${id}`, { method: 'DELETE' });
                loadTasks();
            } catch (error) {
                toast('Error: ' + error.message);
            }
        }

        function toLocalInput(iso) {
            if (!iso) return '';
            const d = new Date(iso);
            const pad = n => String(n).padStart(2, '0');
            return `${d.getFullYear()}-${pad(d.getMonth() + 1)}-${pad(d.getDate())}T${pad(d.getHours())}:${pad(d.getMinutes())}`;
        }

        async function suggestTask() {
            const userInput = document.getElementById('idea').value;
            if (!userInput.trim()) {
                toast('Describe the task first');
                return;
            }
            try {
                const suggestion = await api('/suggest-task', {
                    method: 'POST',
                    headers: { 'Content-Type': 'application/json' },
                    body: JSON.stringify({ userInput })
                });
                document.getElementById('title').value = suggestion.title;
                document.getElementById('description').value = suggestion.description;
                document.getElementById('priority').value = suggestion.priority;
                document.getElementById('timeEstimate').value = suggestion.timeEstimate;
                document.getElementById('dueDate').value = toLocalInput(suggestion.dueDate);
                toast('Suggestion ready - review and create');
            } catch (error) {
                toast('Suggestion failed: ' + error.message);
            }
        }

        async function createTask(event) {
            event.preventDefault();
            const form = event.target;
            const dueDate = form.dueDate.value ? new Date(form.dueDate.value).toISOString() : null;
            try {
                await api('/tasks', {
                    method: 'POST',
                    headers: { 'Content-Type': 'application/json' },
                    body: JSON.stringify({
                        title: form.title.value,
                        description: form.description.value || null,
                        priority: form.priority.value,
                        timeEstimate: Number(form.timeEstimate.value),
                        dueDate
                    })
                });
                form.reset();
                document.getElementById('idea').value = '';
                toast('Task created');
                showView('tasks');
            } catch (error) {
                toast('Error: ' + error.message);
            }
        }

        async function loadCalendar() {
            const container = document.getElementById('calendar');
            try {
                const events = await api('/events');
                const year = calendarMonth.getFullYear();
                const month = calendarMonth.getMonth();
                document.getElementById('calendar-title').textContent =
                    calendarMonth.toLocaleString(undefined, { month: 'long', year: 'numeric' });
                const daysInMonth = new Date(year, month + 1, 0).getDate();
                let html = '';
                for (let i = 0; i < new Date(year, month, 1).getDay(); i++) {
                    html += '<div></div>';
                }
                for (let day = 1; day <= daysInMonth; day++) {
                    const dayEvents = events.filter(e => {
                        const start = new Date(e.start);
                        return start.getFullYear() === year && start.getMonth() === month && start.getDate() === day;
                    });
                    html += `<div class="day"><div class="num">${day}</div>` +
                        dayEvents.map(e => `<div class="event" title="${escapeHtml(e.title)}">${escapeHtml(e.title)}</div>`).join('') +
                        '</div>';
                }
                container.innerHTML = html;
            } catch (error) {
                container.innerHTML = '<div class="error-panel">Error: ' + escapeHtml(error.message) + '</div>';
            }
        }

        function renderReport(report) {
            if (typeof report === 'string') {
                return `<p>${escapeHtml(report)}</p>`;
            }
            const metrics = report.keyMetrics || {};
            let html = '<h3>Key metrics</h3><ul>';
            Object.entries(metrics).forEach(([k, v]) => { html += `<li>${escapeHtml(k)}: ${escapeHtml(v)}</li>`; });
            html += '</ul>';
            const byPriority = (report.chartData || {}).tasksByPriority || {};
            html += '<h3>By priority</h3><table><tr><th>Priority</th><th>Created</th><th>Completed</th></tr>';
            Object.entries(byPriority).forEach(([p, c]) => {
                html += `<tr><td>${escapeHtml(p)}</td><td>${escapeHtml(c.created)}</td><td>${escapeHtml(c.completed)}</td></tr>`;
            });
            html += '</table>';
            html += '<h3>By category</h3><table><tr><th>Category</th><th>Created</th><th>Completed</th><th>Rate</th><th>Avg time</th></tr>';
            (report.categorizedTasksGrid || []).forEach(row => {
                html += `<tr><td>${escapeHtml(row.category)}</td><td>${escapeHtml(row.created)}</td><td>${escapeHtml(row.completed)}</td>` +
                    `<td>${escapeHtml(row.completionRate)}%</td><td>${escapeHtml(row.avgTime)} min</td></tr>`;
            });
            html += '</table>';
            html += '<h3>Summary</h3><div style="white-space: pre-wrap">' + escapeHtml(report.summaryText) + '</div>';
            html += '<h3>Insights</h3><ul>' + (report.insights || []).map(i => `<li>${escapeHtml(i)}</li>`).join('') + '</ul>';
            return html;
        }

        async function loadReport() {
            const container = document.getElementById('report');
            container.innerHTML = 'Analyzing activity...';
            try {
                const data = await api('/analyze-logs');
                container.innerHTML = renderReport(data.report);
            } catch (error) {
                container.innerHTML = '<div class="error-panel">Failed to generate report: ' + escapeHtml(error.message) + '</div>';
            }
        }

        function appendChat(role, text) {
            const log = document.getElementById('chat-log');
            const div = document.createElement('div');
            div.className = role;
            div.textContent = text;
            log.appendChild(div);
            log.scrollTop = log.scrollHeight;
        }

        async function askQuestion(event) {
            event.preventDefault();
            const input = document.getElementById('question');
            const question = input.value;
            if (!question.trim()) return;
            appendChat('user', question);
            input.value = '';
            try {
                const data = await api('/chat-query', {
                    method: 'POST',
                    headers: { 'Content-Type': 'application/json' },
                    body: JSON.stringify({ question })
                });
                appendChat('assistant', data.answer);
            } catch (error) {
                toast('Chat failed: ' + error.message);
            }
        }

        document.querySelectorAll('nav button').forEach(b => b.addEventListener('click', () => showView(b.dataset.view)));
        document.getElementById('suggest-btn').addEventListener('click', suggestTask);
        document.getElementById('task-form').addEventListener('submit', createTask);
        document.getElementById('report-btn').addEventListener('click', loadReport);
        document.getElementById('chat-form').addEventListener('submit', askQuestion);
        document.getElementById('prev-month').addEventListener('click', () => { calendarMonth.setMonth(calendarMonth.getMonth() - 1); loadCalendar(); });
        document.getElementById('next-month').addEventListener('click', () => { calendarMonth.setMonth(calendarMonth.getMonth() + 1); loadCalendar(); });
        loadTasks();
    </script>
</body>
</html>
"""
