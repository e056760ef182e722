# wavely

wavely provides the parts of a service that takes write jobs over HTTP and
keeps them until they have been delivered. It includes a small Flask
application for taking in jobs, a thread-safe store of pending jobs, a
fixed-size worker pool, JSON persistence for the pending list, configuration
loading, endpoint path templates, authentication header providers and retry
backoff strategies.

Install it with the test extras with `pip install .[test]`.

## HTTP application

`wavely.handlers.create_app(store, pool)` returns a Flask app. `store` is a
`wavely.data.PendingJobStore` and `pool` is a `wavely.worker.WorkerPool`.

- `GET /health` returns `200` with `{"message": "ok"}`.
- `POST /jobs` reads the body as JSON, whatever its content type, for example
  `{"uid": "doc-1", "data": "...", "content_type": "application/json"}`.
  The app sends back `400` with `{"error": "Ungültiges JSON-Format"}` if the
  body is not a JSON object, or if `uid` or `content_type` is not a string.
  Otherwise it wraps the job in a `PendingJob`, appends it to the store and
  hands it to `pool.submit`. The reply is `202` with
  `{"message": "Job akzeptiert", "uid": ...}` when the job was queued. It is
  `503` with `{"message": "Versuche es später nochmal", "uid": ...}` when the
  queue is full. The job stays in the store in both cases.

If a request has an `Origin` header, the response allows every origin and
allows credentials. An `OPTIONS` preflight request gets `204` with the allowed
methods `GET,POST`, the allowed headers `Origin,Content-Type,Accept` and a
max age of 12 hours.

## Jobs and the pending store

`wavely.data` defines these types:

- `Job(uid, data, content_type)`. `to_dict` leaves out empty fields.
  `from_dict` validates its input.
- `PendingJob(job, created_at, attempts)`. It converts to and from a dict
  with the keys `Job`, `CreatedAt` (ISO 8601) and `Attempts`.
- `Revision(latest_revision)`.
- `PendingJobStore`, a lock-protected list. It has `append`,
  `remove_uid(uid)` (removes the first match and returns whether it found
  one), `snapshot`, `replace` and `len()`.

## Worker pool

`wavely.worker.WorkerPool(process, workers=10, queue_size=100)` runs the
callable `process(pending_job)` on `workers` daemon threads.

- `start()` starts the threads.
- `submit(job)` queues a job without blocking. It returns `False` when the
  queue is full.
- `stop()` lets the queued jobs finish and then joins the threads.

If `process` raises an exception, the pool logs it and carries on with the
next job.

## Persistence

- `wavely.persistence.save_pending_jobs(store, path)` writes the store as an
  indented JSON array and returns the number of jobs written. It writes
  nothing when the store is empty. Errors are logged, and the return value is
  then `0`.
- `restore_pending_jobs(store, path)` replaces the store's contents with the
  saved jobs and returns them. If the file is missing or unreadable, the store
  is left unchanged and the function returns an empty list.

The default path is `/app/cache/pending_jobs.json`. Restoring does not submit
the jobs anywhere, so the caller has to pass them to the pool.

## Configuration

`wavely.config.load_config(path)` reads a YAML file into a
`wavely.data.WavelyConfig`. `init_config(config_dir)` looks in `config_dir`
(default `/app/config`) for `wavely.cfg.yaml`, then `wavely.cfg.yml`, then
`wavely.cfg`.

A missing file, unreadable file or malformed file is logged, and the defaults
are used. The default `port` is `"4224"`. A bad endpoint template is logged,
and loading continues. Only an auth type that cannot be built stops loading,
with `wavely.config.ConfigError`.

```yaml
port: "4224"
debug: false
current:
  name: archive
  base_url: https://api.example.com
  content_type: application/json
  repetitions: 3
  min_workers: 5
  max_workers: 10        # defaults to min_workers
  endpoints:
    revision: /objects/{{.UID}}/revision
    check: /objects/{{.UID}}/writable
    write: /objects/{{.UID}}
  auth:
    type: bearer
    token: token
```

After loading, `cfg.current.parsed_check_tpl`, `parsed_revision_tpl` and
`parsed_write_tpl` hold the parsed templates, and `cfg.current.auth_provider`
holds the auth provider. The provider is `None` for type `none`.

## Endpoint templates

`wavely.tmpl.parse_template(name, text)` accepts literal text and
`{{.Field}}` placeholders. `.UID`, `.Data` and `.ContentType` refer to fields
of the job. `render_endpoint(tpl, job)` (or `tpl.render(job)`) inserts the
values HTML-escaped.

`prepare_templates(cfg)` parses the three endpoint templates. Malformed
templates and unknown fields raise `wavely.tmpl.TemplateError`.

## Authentication

`wavely.auth.build_auth_provider(AuthConfig(...))` returns one of the
following, based on `type`, which is case-insensitive:

- `basic` returns `BasicAuth`, which produces `Basic <base64 user:password>`.
- `bearer` returns `BearerAuth`, which produces `Bearer <token>`.
- `oauth2` returns `OAuth2Auth`. It posts a refresh-token grant to
  `token_url` and caches the access token until 10 seconds before it expires.
- `none` returns `None`.

Any other type raises `wavely.auth.AuthError`. Call `auth_header()` on a
provider to get the header value. A failed token request also raises
`AuthError`.

## Backoff and XML

```python
from wavely.backoff import SinusBackoff, exponential_backoff
from wavely.convert import map_to_xml

backoff = SinusBackoff.create()
delay = backoff.calculate(3)       # seconds, between 1 and 20 plus up to 10 % jitter
fallback = exponential_backoff(3)  # 8.0

xml = map_to_xml({"title": "Report", "meta": {"pages": 3}})
# b"<title>Report</title><meta><pages>3</pages></meta>"
```

`map_to_xml` renders lists by repeating the element for each object item in
the list. Other list items are skipped. Values of unknown types are logged and
skipped.

## Logging

`wavely.logger.init_logger(debug, log_file)` configures the `wavely` logger
to write to standard output and to `log_file`. If `log_file` is not given, it
uses `./log/wavely.log` in debug mode and `/app/logs/wavely.log` otherwise.

Debug mode writes tab-separated console lines at debug level. Otherwise the
logger writes JSON lines at info level. It raises `OSError` if the log file
cannot be opened.

## What is not included

wavely does not contact the remote target. It has no code that fetches the
latest revision, checks whether an object is writable or writes the data.
`WorkerPool` runs whatever `process` callable you give it, and you have to
remove delivered jobs from the store yourself.

There is also no command-line entry point. The package does not start a
server, install signal handlers or save pending jobs on shutdown. Wire
`create_app`, `WorkerPool` and the persistence functions together in your own
program.