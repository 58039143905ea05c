"""Sample documents, one per format."""

from __future__ import annotations

from code_compressor.compressor import FormatKind, to_format

SAMPLES: dict[FormatKind, str] = {
    FormatKind.TYPESCRIPT: """\
import { Component, OnInit } from '@angular/core';
import { FormBuilder, FormGroup, Validators } from '@angular/forms';

@Component({
  selector: 'app-user-profile',
  templateUrl: './user-profile.component.html'
})
export class UserProfileComponent implements OnInit {
  profileForm: FormGroup;

  constructor(private fb: FormBuilder) {}

  ngOnInit(): void {
    this.profileForm = this.fb.group({
      firstName: ['', [Validators.required]],
      email: ['', [Validators.required, Validators.email]]
    });
  }
}""",
    FormatKind.HTML: """\
<div class="container">
  <header class="page-header">
    <h1>User Profile</h1>
  </header>
  <section class="form-section">
    <form [formGroup]="profileForm">
      <div class="form-group">
        <label>Name</label>
        <input type="text" formControlName="firstName" />
      </div>
      <button type="submit">Save</button>
    </form>
  </section>
</div>""",
    FormatKind.CSS: """\
.container {
  max-width: 1200px;
  margin: 0 auto;
  padding: 20px;
}

.page-header {
  margin-bottom: 30px;
  border-bottom: 2px solid #e0e0e0;
}

.form-group {
  margin-bottom: 20px;
}""",
    FormatKind.JSON: """\
{
  "users": [
    {
      "id": 1,
      "name": "Juan Pérez",
      "email": "juan@example.com"
    }
  ],
  "settings": {
    "theme": "dark",
    "language": "es"
  }
}""",
}


def get_sample(fmt: FormatKind | str) -> str:
    """Return the sample document for ``fmt``."""
    return SAMPLES[to_format(fmt)]
