import sys
import time

import requests

url = "http://localhost:8000/api/event"
headers = {"Content-Type": "application/json"}

nickname = sys.argv[1] if len(sys.argv) > 1 else "tester"
event_type = sys.argv[2] if len(sys.argv) > 2 else "join"

# Skill-server shaped body; the webhook also accepts flat {"nickname", "type"}
payload = {
    "action": {
        "params": {"nickname": nickname, "type": event_type},
    }
}

start_time = time.time()
response = requests.post(url, headers=headers, json=payload)
end_time = time.time()

elapsed_time = end_time - start_time

print("Status Code:", response.status_code)
print("Response:", response.text)
print(f"Request processing time: {elapsed_time:.2f} seconds")
